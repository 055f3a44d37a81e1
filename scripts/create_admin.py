import argparse
import getpass
import os

from dotenv import load_dotenv

from certify.core.app_factory import build_container
from certify.core.config import Settings
from certify.core.logging import configure_logging


def main() -> None:
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(description="Create an administrator account in the configured store.")
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL"))
    parser.add_argument("--full-name", default=os.getenv("ADMIN_FULL_NAME"))
    args = parser.parse_args()

    settings = Settings()
    if settings.store_backend == "memory":
        raise RuntimeError("STORE_BACKEND=memory does not persist anything; use sqlite to create the administrator.")

    email = args.email or input("Administrator email: ").strip()
    full_name = args.full_name or input("Full name: ").strip() or "Administrator"
    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Password: ")

    container = build_container(settings)
    try:
        existing = container.account_directory.get_by_email(email)
        if existing:
            print("An account with this email already exists:", existing.id, f"({existing.role})")
            return
        account = container.account_directory.ensure_default_admin(email, password, full_name)
        if account is None:
            raise RuntimeError("Administrator email and password are required.")
        print("Administrator created:", account.id, "in", settings.database_path)
    finally:
        container.store.close()


if __name__ == "__main__":
    main()
