import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from db import get_db
from utils.bootstrap_indexes import ensure_indexes

if __name__ == "__main__":
    ensure_indexes(get_db())
    print("indexes ensured.")
