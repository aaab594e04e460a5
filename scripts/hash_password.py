# scripts/hash_password.py
# Print a bcrypt hash to paste into a user document by hand.
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import getpass
from utils.auth import hash_password, SALT_ROUNDS


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--rounds", type=int, default=SALT_ROUNDS)
    args = ap.parse_args()

    pw = getpass.getpass("Password to hash: ")
    if not pw:
        print("Nothing to hash.")
        sys.exit(1)
    print("Hashed Password:", hash_password(pw, rounds=args.rounds))


if __name__ == "__main__":
    main()
