import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.auth import create_admin_session_token
from app.core.product_tokens import ProductTokenCodec, get_product_token_codec, now_millis
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.product import Product
from app.modules.notifications.sendgrid import EmailMessage

TEST_TOKEN_SECRET = "test-product-token-secret-0123456789abcdef"


class FakeClock:
    def __init__(self, now_ms: int) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, delta: timedelta) -> None:
        self.now_ms += int(delta.total_seconds() * 1000)


@dataclass
class FakeMailer:
    sent: list[EmailMessage] = field(default_factory=list)

    def send(self, message: EmailMessage) -> bool:
        self.sent.append(message)
        return True


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    test_engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(test_engine)
    yield test_engine
    Base.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(now_millis())


@pytest.fixture()
def token_codec(clock: FakeClock) -> ProductTokenCodec:
    return ProductTokenCodec(TEST_TOKEN_SECRET, clock=clock)


@pytest.fixture(autouse=True)
def quiet_http_client_loggers() -> Generator[None, None, None]:
    # Mirror configure_logging(): the lifespan is not run by the client fixture,
    # and the test client's httpx logger would otherwise log raw token URLs.
    loggers = [logging.getLogger(name) for name in ("httpx", "httpcore")]
    previous = [logger.level for logger in loggers]
    for logger in loggers:
        logger.setLevel(logging.WARNING)
    yield
    for logger, level in zip(loggers, previous):
        logger.setLevel(level)


@pytest.fixture(autouse=True)
def outbox(monkeypatch: pytest.MonkeyPatch) -> FakeMailer:
    mailer = FakeMailer()
    monkeypatch.setattr("app.modules.notifications.service.sendgrid_client", mailer)
    return mailer


@pytest.fixture()
def client(
    session_factory: sessionmaker[Session], token_codec: ProductTokenCodec
) -> Generator[TestClient, None, None]:
    def _get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_product_token_codec] = lambda: token_codec
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    token, _ = create_admin_session_token()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_product(db_session: Session) -> Callable[..., Product]:
    def _make(
        *,
        product_id: int | None = None,
        title: str = "Road bike",
        price: int = 45000,
        submitter_email: str | None = "seller@example.com",
    ) -> Product:
        product = Product(
            id=product_id,
            title=title,
            description="Lightly used, 56cm frame",
            price=price,
            category="sport",
            contact_phone="+48 600 000 000",
            submitter_email=submitter_email,
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make
