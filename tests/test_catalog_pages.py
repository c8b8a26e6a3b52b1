"""Catalog pages: state mirrors what the server returned."""

import httpx
import pytest

from storefront.pages import (
    BrandsPage,
    CategoriesPage,
    ProductPage,
    ProductsPage,
    SubcategoryPage,
)


@pytest.mark.asyncio
async def test_products_state_equals_server_collection(ctx, api):
    page = ProductsPage(ctx)
    result = await page.load()

    assert result == list(api.products.values())
    assert page.products == list(api.products.values())
    assert page.results == 3
    assert not page.loading
    assert page.error is None


@pytest.mark.asyncio
async def test_products_filtered_by_brand(ctx):
    page = ProductsPage(ctx)
    await page.load(brand="brand-acme")
    assert [p["_id"] for p in page.products] == ["p1"]


@pytest.mark.asyncio
async def test_failed_load_surfaces_notice_and_keeps_state(ctx, api, monkeypatch):
    page = ProductsPage(ctx)
    await page.load()

    monkeypatch.setattr(api, "catalog", lambda parts, request: httpx.Response(500))

    assert await page.load() is None
    assert ctx.notifier.last.level == "error"
    assert "Failed to load products." in ctx.notifier.last.message
    assert len(page.products) == 3


@pytest.mark.asyncio
async def test_product_page_load(ctx, api):
    page = ProductPage(ctx)
    product = await page.load("p2")

    assert product == api.products["p2"]
    assert page.product_id == "p2"


@pytest.mark.asyncio
async def test_product_page_unknown_id(ctx):
    page = ProductPage(ctx)
    assert await page.load("missing") is None
    assert page.product is None
    assert "No product for this id missing" in page.error


@pytest.mark.asyncio
async def test_category_open_loads_subcategories_and_products(ctx, api):
    page = CategoriesPage(ctx)
    assert len(await page.load()) == 2

    category = await page.open("cat-men")

    assert category == api.categories["cat-men"]
    assert [s["_id"] for s in page.subcategories] == ["sub-shirts"]
    assert [p["_id"] for p in page.products] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_category_without_subcategories(ctx, api):
    del api.subcategories["sub-phones"]
    page = CategoriesPage(ctx)

    await page.open("cat-elec")

    assert page.subcategories == []
    assert [p["_id"] for p in page.products] == ["p3"]


@pytest.mark.asyncio
async def test_subcategory_page(ctx):
    page = SubcategoryPage(ctx)
    products = await page.load("sub-phones")
    assert [p["_id"] for p in products] == ["p3"]


@pytest.mark.asyncio
async def test_brand_open(ctx, api):
    page = BrandsPage(ctx)
    assert await page.load() == list(api.brands.values())

    brand = await page.open("brand-zed")

    assert brand["name"] == "Zed"
    assert [p["_id"] for p in page.products] == ["p2", "p3"]


@pytest.mark.asyncio
async def test_unknown_brand_surfaces_notice(ctx):
    page = BrandsPage(ctx)
    assert await page.open("brand-none") is None
    assert ctx.notifier.errors()
