"""
Dashboard Controller - product browsing screen.

Coordinates the product, cart, wishlist and user state for the storefront's
home screen and renders it with Flet.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, List, Optional

import flet as ft

from carves.shared.core.errors import RepositoryError
from carves.shared.domain.catalog import EMPTY_RESULT_TEXT, display_name, format_price
from carves.shared.domain.models import CartItem, Product, WishlistItem
from carves.storefront.state.subscription import Subscription, listen_all
from carves.storefront.ui.theme import (
    ACCENT_LIGHT_GRAY,
    AVATAR_SIZE,
    CARD_PADDING,
    PRIMARY_BROWN,
    SCREEN_PADDING,
    TEXT_EMPTY_STATE,
    TEXT_GREETING,
    TEXT_ON_PRIMARY,
    get_log_color,
)

if TYPE_CHECKING:
    from carves.storefront.state import Store

logger = logging.getLogger(__name__)


class DashboardController:
    """Screen-level coordinator for the product dashboard.

    ``activate`` runs once when the screen is shown and ``resume`` every time
    it comes back to the foreground; both reload the profile and the catalog.
    Failures stop here: they are logged and pushed to the log feed.
    """

    def __init__(self, store: Store, page: Optional[ft.Page] = None):
        self.store = store
        self.page = page
        self._subscriptions: List[Subscription] = []

        # Created by build_view, refreshed by the sync callbacks
        self._greeting: Optional[ft.Text] = None
        self._avatar: Optional[ft.Container] = None
        self._product_area: Optional[ft.Container] = None
        self._status_line: Optional[ft.Text] = None

    # --- Lifecycle ---

    async def activate(self) -> None:
        """Load the signed-in profile and the full catalog."""
        await self._refresh_user()
        await self._load_products()

    async def resume(self) -> None:
        logger.debug("Dashboard resumed; reloading profile and catalog")
        await self.activate()

    def dispose(self) -> None:
        """Detach every reactive listener registered by ``build_view``."""
        while self._subscriptions:
            self._subscriptions.pop().dispose()
        logger.info("DashboardController listeners disposed")

    # --- User Actions ---

    def search(self, query: Optional[str]) -> List[Product]:
        return self.store.products.set_query(query)

    async def add_to_cart(self, product: Product) -> Optional[CartItem]:
        """Add one unit of ``product`` to the cart; None if the store refused."""
        try:
            return await self.store.cart.add_to_cart(CartItem.from_product(product))
        except RepositoryError as e:
            await self._report(f"Could not add {display_name(product)} to cart: {e}")
            return None

    async def add_to_wishlist(self, product: Product) -> Optional[str]:
        try:
            return await self.store.wishlist.add_to_wishlist(WishlistItem.from_product(product))
        except RepositoryError as e:
            await self._report(f"Could not add {display_name(product)} to wishlist: {e}")
            return None

    # --- Internals ---

    async def _refresh_user(self) -> None:
        try:
            await self.store.user.refresh()
        except RepositoryError as e:
            await self._report(f"Could not load profile: {e}")

    async def _load_products(self) -> None:
        try:
            await self.store.products.load_all()
        except RepositoryError as e:
            await self._report(f"Could not load products: {e}")

    async def _report(self, message: str) -> None:
        logger.error(message)
        await self.store.app.push_log(message, "error")

    # --- View ---

    def build_view(self) -> ft.Control:
        """Build the dashboard and bind it to the reactive state."""
        self._greeting = ft.Text("", size=22, weight=ft.FontWeight.W_600, color=TEXT_GREETING)
        self._avatar = ft.Container(width=AVATAR_SIZE, height=AVATAR_SIZE, border_radius=AVATAR_SIZE // 2)
        self._product_area = ft.Container(expand=True)
        self._status_line = ft.Text("", size=12)
        search_field = ft.TextField(
            hint_text="Search products...",
            value=self.store.products.query,
            on_change=lambda e: self.search(e.control.value),
        )

        self._subscriptions.append(self.store.products.subscribe(self._sync_products))
        self._subscriptions.append(self.store.user.subscribe(self._sync_user))
        self._subscriptions.append(
            listen_all([self.store.app.notifications, self.store.app.logs], self._sync_status)
        )

        self._sync_user()
        self._sync_products()
        self._sync_status()

        return ft.Container(
            expand=True,
            padding=SCREEN_PADDING,
            content=ft.Column(
                [
                    ft.Row([self._avatar, self._greeting], spacing=12),
                    search_field,
                    self._status_line,
                    self._product_area,
                ],
                expand=True,
                spacing=8,
            ),
        )

    def _sync_user(self, *_) -> None:
        if self._greeting is None or self._avatar is None:
            return
        profile = self.store.user.profile
        self._greeting.value = self.store.user.greeting
        if profile and profile.image:
            self._avatar.content = ft.Image(src=profile.image, width=AVATAR_SIZE, height=AVATAR_SIZE)
            self._avatar.bgcolor = None
        else:
            self._avatar.content = ft.Icon(ft.Icons.PERSON, color=TEXT_ON_PRIMARY)
            self._avatar.bgcolor = ACCENT_LIGHT_GRAY
        self._refresh_page()

    def _sync_products(self, *_) -> None:
        if self._product_area is None:
            return
        state = self.store.products
        if state.loading.value:
            self._product_area.content = ft.Row(
                [ft.ProgressRing(color=PRIMARY_BROWN)],
                alignment=ft.MainAxisAlignment.CENTER,
            )
        elif state.is_empty:
            self._product_area.content = ft.Text(EMPTY_RESULT_TEXT, color=TEXT_EMPTY_STATE)
        else:
            cards = ft.ListView(expand=True, spacing=8)
            cards.controls = [self._build_product_card(p) for p in state.filtered_products.value]
            self._product_area.content = cards
        self._refresh_page()

    def _sync_status(self, *_) -> None:
        if self._status_line is None:
            return
        # Newest of the last log entry and the last notification wins
        candidates = [
            (entry.get("ts", 0), entry.get("message", ""), entry.get("level", "info"))
            for entry in self.store.app.logs.value[-1:]
        ] + [
            (entry.get("ts", 0), entry.get("message", ""), "success")
            for entry in self.store.app.notifications.value[-1:]
        ]
        if candidates:
            _, message, level = max(candidates, key=lambda c: c[0])
            self._status_line.value = message
            self._status_line.color = get_log_color(level)
        self._refresh_page()

    def _build_product_card(self, product: Product) -> ft.Control:
        return ft.Container(
            bgcolor=PRIMARY_BROWN,
            border_radius=12,
            padding=CARD_PADDING,
            content=ft.Column(
                [
                    ft.Text(display_name(product), size=16, weight=ft.FontWeight.W_600, color=TEXT_ON_PRIMARY),
                    ft.Text(format_price(product.price), color=TEXT_ON_PRIMARY),
                    ft.Text(product.description or "", color=TEXT_ON_PRIMARY),
                    ft.Row(
                        [
                            ft.OutlinedButton(
                                "Add to Cart",
                                on_click=lambda e, p=product: asyncio.create_task(self.add_to_cart(p)),
                                style=ft.ButtonStyle(color=TEXT_ON_PRIMARY),
                            ),
                            ft.OutlinedButton(
                                "Wishlist",
                                icon=ft.Icons.FAVORITE_BORDER,
                                on_click=lambda e, p=product: asyncio.create_task(self.add_to_wishlist(p)),
                                style=ft.ButtonStyle(color=TEXT_ON_PRIMARY),
                            ),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                ],
                spacing=4,
            ),
        )

    def _refresh_page(self) -> None:
        if self.page is not None:
            self.page.update()

