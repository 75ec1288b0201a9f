"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
The storage handle is built here once and passed to every component.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shophub.application.add_product import AddProductHandler
from shophub.application.advance_order_status import AdvanceOrderStatusHandler
from shophub.application.manage_cart import (
    AddToCartHandler,
    RemoveFromCartHandler,
    ShowCartHandler,
    UpdateCartHandler,
)
from shophub.application.manage_reviews import (
    AddReviewHandler,
    DeleteReviewHandler,
    EditReviewHandler,
    ListReviewsHandler,
)
from shophub.application.notifier import Notifier
from shophub.application.place_order import PlaceOrderHandler
from shophub.application.reconcile_reservations import ReconcileReservationsHandler
from shophub.application.set_inventory import SetStockHandler
from shophub.application.show_inventory import ShowInventoryHandler
from shophub.application.show_order import ListOrdersHandler, ShowOrderHandler
from shophub.application.update_product import UpdateProductHandler
from shophub.domain.repository.storage import Storage
from shophub.domain.service.cart_store import CartStore
from shophub.domain.service.inventory_ledger import InventoryLedger
from shophub.domain.service.rating_aggregator import RatingAggregator
from shophub.infrastructure.config import Settings
from shophub.infrastructure.notifications.background_notifier import BackgroundNotifier
from shophub.infrastructure.notifications.smtp_notifier import (
    LogOnlyNotifier,
    SmtpOrderNotifier,
)
from shophub.infrastructure.persistence.json_storage import JsonStorage
from shophub.infrastructure.reservation_sweeper import ReservationSweeper


@dataclass
class Container:
    settings: Settings
    storage: Storage
    ledger: InventoryLedger
    cart_store: CartStore
    aggregator: RatingAggregator
    notifier: Notifier
    sweeper: ReservationSweeper | None = field(default=None, repr=False)

    # --- Orders ---------------------------------------------------------------

    def place_order(self) -> PlaceOrderHandler:
        return PlaceOrderHandler(self.storage, self.ledger, self.cart_store, self.notifier)

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.storage.orders)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.storage.orders)

    def advance_order_status(self) -> AdvanceOrderStatusHandler:
        return AdvanceOrderStatusHandler(self.storage)

    # --- Cart -----------------------------------------------------------------

    def show_cart(self) -> ShowCartHandler:
        return ShowCartHandler(self.storage, self.cart_store)

    def add_to_cart(self) -> AddToCartHandler:
        return AddToCartHandler(self.storage, self.cart_store)

    def update_cart(self) -> UpdateCartHandler:
        return UpdateCartHandler(self.storage, self.cart_store)

    def remove_from_cart(self) -> RemoveFromCartHandler:
        return RemoveFromCartHandler(self.storage, self.cart_store)

    # --- Reviews --------------------------------------------------------------

    def add_review(self) -> AddReviewHandler:
        return AddReviewHandler(self.storage, self.aggregator)

    def edit_review(self) -> EditReviewHandler:
        return EditReviewHandler(self.storage, self.aggregator)

    def delete_review(self) -> DeleteReviewHandler:
        return DeleteReviewHandler(self.storage, self.aggregator)

    def list_reviews(self) -> ListReviewsHandler:
        return ListReviewsHandler(self.storage, self.aggregator)

    # --- Catalogue & inventory ------------------------------------------------

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.storage, self.settings.currency)

    def update_product(self) -> UpdateProductHandler:
        return UpdateProductHandler(self.storage)

    def set_stock(self) -> SetStockHandler:
        return SetStockHandler(self.storage.products, self.ledger)

    def show_inventory(self) -> ShowInventoryHandler:
        return ShowInventoryHandler(self.storage)

    def reconcile(self) -> ReconcileReservationsHandler:
        return ReconcileReservationsHandler(self.ledger, self.settings.hold_ttl)

    def start_sweeper(self) -> ReservationSweeper | None:
        """Start the periodic hold sweep unless it is disabled or already running."""
        if not self.settings.sweep_enabled:
            return None
        if self.sweeper is None:
            self.sweeper = ReservationSweeper(
                self.reconcile().handle, self.settings.sweep_interval_seconds
            )
        self.sweeper.start()
        return self.sweeper

    def close(self) -> None:
        if self.sweeper is not None:
            self.sweeper.stop()
        if isinstance(self.notifier, BackgroundNotifier):
            self.notifier.shutdown(wait=True)


def build_notifier(settings: Settings) -> Notifier:
    if settings.email_enabled:
        inner: Notifier = SmtpOrderNotifier(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.smtp_from,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )
    else:
        inner = LogOnlyNotifier()
    return BackgroundNotifier(inner, max_workers=settings.notifier_workers)


def build_container(
    settings: Settings,
    storage: Storage | None = None,
    notifier: Notifier | None = None,
) -> Container:
    storage = storage or JsonStorage(settings.data_file)
    return Container(
        settings=settings,
        storage=storage,
        ledger=InventoryLedger(storage),
        cart_store=CartStore(storage),
        aggregator=RatingAggregator(storage),
        notifier=notifier or build_notifier(settings),
    )
