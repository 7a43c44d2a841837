"""Create an administrator account: python -m scripts.create_admin <email> <name>"""
import sys

from database import get_db_context, init_db
from tools.identity import create_user

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("usage: python -m scripts.create_admin <email> <name>")
        sys.exit(1)

    init_db()
    with get_db_context() as db:
        u = create_user(db=db, email=sys.argv[1], name=" ".join(sys.argv[2:]), role="admin")
        print('Created', u)
