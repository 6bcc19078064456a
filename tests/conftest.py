import pytest
from decimal import Decimal
from navandex import create_app, db
from navandex.config import TestingConfig
from navandex.models.user import User
from navandex.models.order import Order
from navandex.models.content import ExchangeRate
from navandex.enums import UserRole, OrderStatus


@pytest.fixture(scope="function")
def app():
    """Create application for testing"""
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Test CLI runner"""
    return app.test_cli_runner()


def make_user(name, phone_number, role, password="password123", **kwargs):
    user = User(
        name=name,
        phone_number=phone_number,
        role=role,
        is_active=True,
        address=kwargs.get("address", ""),
        city=kwargs.get("city", ""),
        country=kwargs.get("country", ""),
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def make_order(user, **kwargs):
    values = {
        "title": "Sneakers",
        "size": "42",
        "color": "Black",
        "quantity": 1,
        "price": Decimal("10.00"),
        "shipping_price": Decimal("2.00"),
        "local_shipping_price": Decimal("1.00"),
        "status": OrderStatus.PENDING,
    }
    values.update(kwargs)
    order = Order(user_id=user.id, **values)
    db.session.add(order)
    db.session.commit()
    return order


def login(client, phone_number, password="password123"):
    response = client.post(
        "/api/auth/login", json={"phone_number": phone_number, "password": password}
    )
    assert response.status_code == 200, f"Login failed: {response.json}"
    return response.json["access_token"]


# User fixtures
@pytest.fixture
def admin_user(app):
    """Create an admin user"""
    return make_user("Test Admin", "9647500000001", UserRole.ADMIN)


@pytest.fixture
def worker_user(app):
    """Create a warehouse worker"""
    return make_user("Test Worker", "9647500000002", UserRole.WORKER)


@pytest.fixture
def customer_user(app):
    """Create a customer user"""
    return make_user(
        "Test Customer",
        "9647500000003",
        UserRole.CUSTOMER,
        address="100m Street",
        city="Erbil",
        country="Iraq",
    )


@pytest.fixture
def other_customer(app):
    """A second customer, for ownership checks"""
    return make_user("Other Customer", "9647500000004", UserRole.CUSTOMER)


# Auth token fixtures
@pytest.fixture
def admin_token(client, admin_user):
    return login(client, admin_user.phone_number)


@pytest.fixture
def worker_token(client, worker_user):
    return login(client, worker_user.phone_number)


@pytest.fixture
def customer_token(client, customer_user):
    return login(client, customer_user.phone_number)


@pytest.fixture
def other_customer_token(client, other_customer):
    return login(client, other_customer.phone_number)


@pytest.fixture
def admin_headers(admin_token):
    """Admin authentication headers"""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def worker_headers(worker_token):
    """Worker authentication headers"""
    return {"Authorization": f"Bearer {worker_token}"}


@pytest.fixture
def customer_headers(customer_token):
    """Customer authentication headers"""
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def other_customer_headers(other_customer_token):
    return {"Authorization": f"Bearer {other_customer_token}"}


# Data fixtures
@pytest.fixture
def order(app, customer_user):
    """A pending order of the test customer"""
    return make_order(customer_user)


@pytest.fixture
def orders(app, customer_user, other_customer):
    """Orders across statuses and customers"""
    return [
        make_order(customer_user, title="Red Dress", status=OrderStatus.PENDING, country="TR"),
        make_order(customer_user, title="Blue Jeans", status=OrderStatus.PURCHASED,
                   order_number="TRK-1001", country="TR"),
        make_order(customer_user, title="Watch", status=OrderStatus.DELIVERED_TO_WAREHOUSE),
        make_order(customer_user, title="Bag", status=OrderStatus.CANCELLED),
        make_order(other_customer, title="Phone Case", status=OrderStatus.CONFIRMED, country="US"),
    ]


@pytest.fixture
def exchange_rate(app):
    """30 lira to the dollar"""
    rate = ExchangeRate(rate=Decimal("30.0000"))
    db.session.add(rate)
    db.session.commit()
    return rate
