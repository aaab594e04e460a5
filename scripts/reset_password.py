# scripts/reset_password.py
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import getpass
from utils.auth import get_user, set_password


def main():
    ap = argparse.ArgumentParser(description="Set a new password on an existing account.")
    ap.add_argument("email")
    args = ap.parse_args()

    if not get_user(args.email):
        print(f"❌ No user with email {args.email}")
        sys.exit(1)
    pw = getpass.getpass("New password: ")
    if not pw or pw != getpass.getpass("Repeat: "):
        print("❌ Passwords empty or do not match.")
        sys.exit(1)
    print("updated:", set_password(args.email, pw))


if __name__ == "__main__":
    main()
