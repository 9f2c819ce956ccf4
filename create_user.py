from app import create_app
from errors import DomainError
from models import Role
from modules.accounts.credentials import register_user
from records import current_records

app = create_app()

def create_user(username, password, role, display_name=None):
    with app.app_context():
        records = current_records()
        try:
            user = register_user(records, username, password, display_name=display_name, role=Role(role))
        except DomainError as exc:
            print(f"⚠️  {exc.message}")
            return
        records.commit()
        print(f"✅ Created user: {user.username} (role: {user.role.value})")

if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a new user.')
    parser.add_argument('username', help='Username')
    parser.add_argument('password', help='Password')
    parser.add_argument('role', choices=[r.value for r in Role], help='User role')
    parser.add_argument('--display-name', help='Name shown in rankings')

    args = parser.parse_args()
    create_user(args.username, args.password, args.role, args.display_name)
