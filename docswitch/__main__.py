import sys

from docswitch._cli import main

if __name__ == "__main__":
    sys.exit(main())
