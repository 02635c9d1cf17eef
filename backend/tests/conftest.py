# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os

from wikihub.main import app
from wikihub.database import Base, get_db
from wikihub.models import (
    Member, Project, ProjectState, Relationship, RoleType, Document, DocumentHistory
)
from wikihub.services.cache import project_cache

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

OWNER_ID = 1
PARTNER_ID = 2
STRANGER_ID = 3


@pytest.fixture
def engine():
    """Fresh in-memory database per test so commits and rollbacks are real"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture
def db_session(engine):
    """Creates a new database session for a test"""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()

@pytest.fixture(autouse=True)
def clear_project_cache():
    """Project ids repeat across test databases, so the shared cache must start empty"""
    project_cache.clear()
    yield
    project_cache.clear()

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def members(db_session):
    """Owner, participant and an unrelated member"""
    rows = [
        Member(id=OWNER_ID, account="owner", nickname="Owner", email="owner@example.com"),
        Member(id=PARTNER_ID, account="partner", nickname="Partner", email="partner@example.com"),
        Member(id=STRANGER_ID, account="stranger", nickname="Stranger", email="stranger@example.com"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows

def _make_project(db_session, open_state=ProjectState.PRIVATE, password=None, name="Test Project"):
    project = Project(
        name=name,
        description="Test Description",
        open_state=open_state,
        password=password,
        creator_id=OWNER_ID
    )
    db_session.add(project)
    db_session.flush()
    db_session.add_all([
        Relationship(project_id=project.id, member_id=OWNER_ID, role_type=RoleType.OWNER),
        Relationship(project_id=project.id, member_id=PARTNER_ID, role_type=RoleType.PARTICIPANT),
    ])
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def project_factory(db_session, members):
    """Build a project with the standard owner and participant"""
    def _factory(**kwargs):
        return _make_project(db_session, **kwargs)
    return _factory

@pytest.fixture
def sample_project(db_session, members):
    """Private project owned by OWNER_ID with PARTNER_ID as participant"""
    return _make_project(db_session)

@pytest.fixture
def public_project(db_session, members):
    return _make_project(db_session, open_state=ProjectState.PUBLIC, name="Public Project")

@pytest.fixture
def protected_project(db_session, members):
    return _make_project(
        db_session,
        open_state=ProjectState.PASSWORD_PROTECTED,
        password="Secret123",
        name="Protected Project"
    )

@pytest.fixture
def sample_documents(db_session, sample_project):
    """Three documents: A at the root, B and C under A, each with one history row"""
    documents = [
        Document(id=1, project_id=sample_project.id, name="A", parent_id=0, sort=0),
        Document(id=2, project_id=sample_project.id, name="B", parent_id=1, sort=1),
        Document(id=3, project_id=sample_project.id, name="C", parent_id=1, sort=2),
    ]
    db_session.add_all(documents)
    db_session.flush()
    db_session.add_all([
        DocumentHistory(document_id=document.id, name=document.name, content="v1", modified_by=OWNER_ID)
        for document in documents
    ])
    db_session.commit()
    return documents

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    for file in ["wikihub.db", "test-wikihub.db"]:
        if os.path.exists(file):
            os.remove(file)
