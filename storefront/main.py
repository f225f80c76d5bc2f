# storefront/main.py
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import StorageError
from storefront.database import create_db_and_tables, make_engine
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.favorites_repo import FavoritesRepository
from storefront.repositories.kv_store import KeyValueStore, MemoryKeyValueStore, SQLKeyValueStore
from storefront.repositories.session_repo import SessionRepository
from storefront.repositories.user_repo import UserRepository
from storefront.services.account_service import AccountService
from storefront.services.cart_service import CartService
from storefront.services.credential_service import CredentialService
from storefront.services.favorites_service import FavoritesService
from storefront.services.remote_service import MockRemoteService, Sleep
from storefront.services.session_service import SessionService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)


class Storefront:
    """
    Explicit wiring of the storefront core.

    One store instance is shared by every repository; each service gets
    only the repository (or services) it needs. This is the narrow surface
    the UI layer talks to:

        shop = Storefront.from_settings()
        shop.cart.add({"id": "p1", "title": "Cake", "price": 10})
        outcome = await shop.accounts.sign_in(LoginForm(email=..., password=...))
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Settings | None = None,
        delay: float | None = None,
        list_delay: float | None = None,
        sleep: Sleep | None = None,
    ):
        settings = settings or get_settings()
        self.settings = settings
        self.store = store

        self.cart = CartService(CartRepository(store, settings.CART_KEY))
        self.favorites = FavoritesService(FavoritesRepository(store, settings.FAVORITES_KEY))
        self.credentials = CredentialService(UserRepository(store, settings.USERS_KEY))
        self.session = SessionService(SessionRepository(store, settings.SESSION_KEY))

        remote_kwargs = {} if sleep is None else {"sleep": sleep}
        self.remote = MockRemoteService(
            self.credentials,
            delay=settings.API_DELAY_SECONDS if delay is None else delay,
            list_delay=settings.LIST_USERS_DELAY_SECONDS if list_delay is None else list_delay,
            **remote_kwargs,
        )
        self.accounts = AccountService(
            self.credentials,
            self.remote,
            self.session,
            use_mock_api=settings.USE_MOCK_API,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, engine: Engine | None = None) -> "Storefront":
        """
        Build the storefront over the durable SQL store.

        Startup:
          - create the engine from DATABASE_URL (unless one is given)
          - create the kv_entries table if missing
        """
        settings = settings or get_settings()
        configure_logging(settings)
        engine = engine or make_engine(settings.DATABASE_URL)
        try:
            create_db_and_tables(engine)
        except SQLAlchemyError as e:
            logger.error("Startup: storage initialization FAILED: %s", e)
            raise StorageError(f"Storage initialization failed: {e}") from e
        logger.info("Startup: storage ready at %s", engine.url.render_as_string(hide_password=True))
        return cls(SQLKeyValueStore(engine), settings=settings)

    @classmethod
    def in_memory(cls, settings: Settings | None = None) -> "Storefront":
        """Same graph over an in-process store with no artificial latency."""
        return cls(MemoryKeyValueStore(), settings=settings, delay=0, list_delay=0)

    def badges(self) -> dict[str, int]:
        """Counts shown on the navbar cart and favorites icons."""
        return {"cart": self.cart.item_count(), "favorites": self.favorites.count()}
