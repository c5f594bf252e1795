import os

from dotenv import find_dotenv, load_dotenv

# .env is looked up from the working directory, not the installed package
load_dotenv(find_dotenv(usecwd=True))


def get_db_path() -> str:
    return os.environ.get("NF_BUILDER_DB", "nf_builder.db")


def get_delimiter() -> str:
    return os.environ.get("NF_BUILDER_DELIMITER", ",")
