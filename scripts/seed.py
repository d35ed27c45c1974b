import argparse

from dotenv import load_dotenv

from app.core.config import Settings
from app.core.logging import configure_logging
from app.infrastructure.persistence.sqlite import SQLitePersistence
from app.services.mock_data_service import MockDataService


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Fill the database with mock users and pets.")
    parser.add_argument("--users", type=int, default=50)
    parser.add_argument("--pets", type=int, default=100)
    args = parser.parse_args()

    settings = Settings()
    configure_logging(settings.log_level)
    persistence = SQLitePersistence(settings.database_path)
    try:
        counts = MockDataService(persistence, bcrypt_rounds=settings.bcrypt_rounds).seed(
            users=args.users, pets=args.pets
        )
    finally:
        persistence.close()

    print(f"Inserted {counts['users']} users and {counts['pets']} pets into {settings.database_path}")


if __name__ == "__main__":
    main()
