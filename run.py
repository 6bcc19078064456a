import os
from getpass import getpass
from dotenv import load_dotenv

# Load environment variables before the config module reads them
load_dotenv()

from navandex import create_app, db  # noqa: E402
from navandex.models.user import User  # noqa: E402
from navandex.enums import UserRole  # noqa: E402

# Create app instance
app = create_app()


@app.cli.command()
def init_db():
    """Initialize database"""
    db.create_all()
    print('Database initialized successfully!')


@app.cli.command()
def drop_db():
    """Drop all tables"""
    if input('Are you sure you want to drop all tables? (yes/no): ') == 'yes':
        db.drop_all()
        print('Database dropped successfully!')
    else:
        print('Operation cancelled')


@app.cli.command()
def create_admin():
    """Create admin user"""
    phone_number = input('Admin phone number: ').strip()
    name = input('Admin name: ').strip() or 'System Administrator'
    password = getpass('Admin password: ')

    if User.query.filter_by(phone_number=phone_number).first():
        print('Phone number already exists')
        return

    admin = User(
        name=name,
        phone_number=phone_number,
        role=UserRole.ADMIN,
        is_active=True
    )
    admin.set_password(password)

    db.session.add(admin)
    db.session.commit()

    print('Admin user created successfully!')


if __name__ == '__main__':
    app.run(
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('DEBUG', 'True') == 'True'
    )
