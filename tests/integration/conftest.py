"""Integration-test fixtures.

Flows run end to end through AppContext: commands and queries go through the
session gate, the QueryCache and the MutationCoordinator into a real store.
"""

from decimal import Decimal

import pytest

from src.bm_app.context import AppContext
from src.bm_store.domain.models import Customer, Product


@pytest.fixture
async def customer(ctx: AppContext) -> Customer:
    return await ctx.commands.create_customer("Ali Raza", "0300-1234567")


@pytest.fixture
async def products(ctx: AppContext) -> list[Product]:
    soap = await ctx.commands.create_product("Soap", Decimal("100"), 20, category="Care")
    rice = await ctx.commands.create_product("Rice", Decimal("50"), 3, category="Food")
    return [soap, rice]
