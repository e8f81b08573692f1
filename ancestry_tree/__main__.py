import sys

from ancestry_tree.create_tree import main

if __name__ == "__main__":
    sys.exit(main())
