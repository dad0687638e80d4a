from nfa2dfa.cli import run

if __name__ == '__main__':
    run()
