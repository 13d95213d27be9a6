# conftest.py
import pytest

from casetrack import create_app
from casetrack.core.metrics import metrics
from casetrack.extensions import db
from tests.utils import OTHER_HOST, TENANT_HOST, headers_for, make_user


@pytest.fixture
def app():
    """Fresh app and in-memory database for every test"""
    metrics.reset()
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

    metrics.reset()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def resolver(app):
    return app.extensions["tenant_resolver"]


@pytest.fixture
def tenant(resolver):
    return resolver.provision("acme", name="Acme Legal")


@pytest.fixture
def other_tenant(resolver):
    return resolver.provision("globex", name="Globex Law")


@pytest.fixture
def admin_user(tenant):
    return make_user(tenant, "admin", role="admin")


@pytest.fixture
def lawyer_user(tenant):
    return make_user(tenant, "counsel", role="abogado")


@pytest.fixture
def other_user(other_tenant):
    return make_user(other_tenant, "outsider", role="admin")


@pytest.fixture
def host_headers(tenant):
    return {"Host": TENANT_HOST}


@pytest.fixture
def auth_headers(admin_user):
    """Bearer token of the acme admin, sent to the acme host"""
    return headers_for(admin_user, TENANT_HOST)


@pytest.fixture
def lawyer_headers(lawyer_user):
    return headers_for(lawyer_user, TENANT_HOST)


@pytest.fixture
def other_headers(other_user):
    return headers_for(other_user, OTHER_HOST)
