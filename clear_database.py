"""
Clear the quiz key-value store (sessions and scores).
Use this to reset the store to a clean state, or pass --expired to only drop
entries whose TTL has passed.
"""
import sys

from config import Config
from services.kv_store import KeyValueStore


def clear_all_data(url=None, expired_only=False):
    """Delete store entries; returns the number of rows removed."""
    store = KeyValueStore(url or Config.QUIZ_STORE_URL).connect()
    try:
        if expired_only:
            num = store.purge_expired()
            print(f"✅ Removed {num} expired entr{'y' if num == 1 else 'ies'}")
        else:
            num = store.clear()
            print("✅ Successfully cleared store:")
            print(f"   - Deleted {num} entr{'y' if num == 1 else 'ies'}")
        return num
    finally:
        store.close()


if __name__ == "__main__":
    if "--expired" in sys.argv[1:]:
        clear_all_data(expired_only=True)
    else:
        response = input("⚠️  This will delete ALL sessions and scores. Are you sure? (yes/no): ")
        if response.lower() == 'yes':
            clear_all_data()
        else:
            print("❌ Operation cancelled.")
