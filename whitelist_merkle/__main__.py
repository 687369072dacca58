import sys

from whitelist_merkle.generate_root import main

if __name__ == "__main__":
    sys.exit(main())
