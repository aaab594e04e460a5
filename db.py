import os
from pymongo import MongoClient
from dotenv import load_dotenv

load_dotenv()
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "school_management")

_client = None
_db = None

def get_db():
    global _client, _db
    if _db is None:
        _client = MongoClient(
            MONGODB_URI,
            serverSelectionTimeoutMS=8000,
            appname="SCHOOL_MAINTENANCE",
        )
        # Fail fast if the URI/network is misconfigured
        _client.admin.command("ping")
        _db = _client[DB_NAME]
    return _db

def col(name: str):
    return get_db()[name]
