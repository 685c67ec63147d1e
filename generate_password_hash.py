#!/usr/bin/env python3
"""
Password Hash Generator
Generates the bcrypt ADMIN_PASSWORD_HASH for the admin console sign-in.
"""
import getpass

from portfolio.utils.auth import hash_password


def main():
    """Prompt for the admin password and print the .env line."""
    print("=" * 60)
    print("Admin Password Hash Generator")
    print("=" * 60)
    print()
    print("Copy the output to your .env file as ADMIN_PASSWORD_HASH")
    print()

    # Get password securely (won't echo to screen)
    password = getpass.getpass("Enter admin password: ")

    if not password:
        print("\nError: Password cannot be empty")
        return

    if password != getpass.getpass("Confirm password: "):
        print("\nError: Passwords do not match")
        return

    print("\nGenerating hash (this may take a moment)...")
    print(f"\nADMIN_PASSWORD_HASH={hash_password(password)}\n")
    print("Keep this hash secret and never commit it to version control!")


if __name__ == "__main__":
    main()
