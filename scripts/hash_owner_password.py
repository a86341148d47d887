import getpass
import os
import sys

# Add project root to sys.path to allow imports from portfolio
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from portfolio.core.security import hash_password


def main():
    password = getpass.getpass("Owner password: ")
    if not password:
        print("Error: password must not be empty.")
        return 1
    if password != getpass.getpass("Repeat password: "):
        print("Error: passwords do not match.")
        return 1

    print("Add this line to your .env file:")
    print(f"OWNER_PASSWORD_HASH={hash_password(password)}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        sys.exit(130)
