from app import create_app
from modules.accounts.service import AuthError, register
from repository import current_repository


def create_user(name, email, password, app=None):
    app = app or create_app()
    with app.app_context():
        repository = current_repository()
        with repository.lock:
            try:
                user = register(repository.load_users(), name, email, password, password,
                                app.config["MIN_PASSWORD_LENGTH"])
            except AuthError as exc:
                print(f"⚠️  {exc.message}: {email}")
                return None
            repository.add_user(user)
        print(f"✅ Created user: {name} <{email}> (id: {user.id})")
        return user

if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a new marketplace user.')
    parser.add_argument('name', help='Display name')
    parser.add_argument('email', help='Email (login key)')
    parser.add_argument('password', help='Password')

    args = parser.parse_args()
    create_user(args.name, args.email, args.password)
