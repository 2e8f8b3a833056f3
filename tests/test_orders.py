"""
Order service tests: payments, updates, listing and client debt.
"""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.exceptions import InvalidArgumentError, NotFoundError
from printshop.models.order import OrderStatus
from printshop.schemas.client import ClientUpdate
from printshop.schemas.impression import ImpressionCreate
from printshop.schemas.order import OrderUpdate
from printshop.services.client import ClientService
from printshop.services.impression import ImpressionService
from printshop.services.order import OrderService


async def _order_of_100(db_session: AsyncSession, make_client, make_order):
    client = await make_client()
    order = await make_order(client)
    await ImpressionService(db_session).create(
        ImpressionCreate(order_id=order.id, name="Sign", price=100.0)
    )
    return client, order


@pytest.mark.asyncio
async def test_pay_debt(db_session: AsyncSession, make_client, make_order):
    """Debt 100, pay 40 -> 60, pay 1000 -> 0."""
    client, order = await _order_of_100(db_session, make_client, make_order)
    service = OrderService(db_session)
    assert order.debt == pytest.approx(100.0)

    order = await service.pay_debt(order.id, 40.0)
    assert order.debt == pytest.approx(60.0)
    assert client.debt == pytest.approx(60.0)

    order = await service.pay_debt(order.id, 1000.0)
    assert order.debt == 0
    assert client.debt == 0
    assert order.total == pytest.approx(100.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0.0, -5.0, float("nan"), float("inf")])
async def test_pay_debt_rejects_non_positive_amount(
    db_session: AsyncSession, make_client, make_order, amount
):
    """Zero, negative, NaN or infinite payments are rejected and change nothing."""
    _, order = await _order_of_100(db_session, make_client, make_order)

    with pytest.raises(InvalidArgumentError):
        await OrderService(db_session).pay_debt(order.id, amount)

    assert order.debt == pytest.approx(100.0)


@pytest.mark.asyncio
async def test_pay_debt_unknown_order(db_session: AsyncSession):
    """Paying a missing order fails with NotFoundError."""
    with pytest.raises(NotFoundError):
        await OrderService(db_session).pay_debt("missing", 10.0)


@pytest.mark.asyncio
async def test_get_order_includes_client_info(db_session: AsyncSession, make_client, make_order):
    """Order details carry the client's name and contact."""
    client = await make_client("Casa Bela", contact="84 000 0000")
    order = await make_order(client)

    fetched = await OrderService(db_session).get_or_404(order.id)
    assert fetched.client_name == "Casa Bela"
    assert fetched.client_contact == "84 000 0000"


@pytest.mark.asyncio
async def test_update_rates_recalculates(db_session: AsyncSession, make_client, make_order):
    """Changing iva without an override recomputes total and debt."""
    _, order = await _order_of_100(db_session, make_client, make_order)

    order = await OrderService(db_session).update(order, OrderUpdate(iva=10.0, discount=5.0))

    assert order.subtotal == pytest.approx(100.0)
    assert order.total == pytest.approx(105.0)
    assert order.debt == pytest.approx(105.0)


@pytest.mark.asyncio
async def test_update_with_override_keeps_given_totals(
    db_session: AsyncSession, make_client, make_order
):
    """An explicit subtotal/total is stored as given."""
    _, order = await _order_of_100(db_session, make_client, make_order)

    order = await OrderService(db_session).update(
        order,
        OrderUpdate(subtotal=80.0, total=90.0, iva=16.0, status=OrderStatus.IN_PRODUCTION),
    )

    assert order.subtotal == 80.0
    assert order.total == 90.0
    assert order.iva == 16.0
    assert order.status == OrderStatus.IN_PRODUCTION
    assert order.debt == pytest.approx(100.0)


@pytest.mark.asyncio
async def test_move_order_to_another_client(db_session: AsyncSession, make_client, make_order):
    """Both clients' debts follow the order."""
    old_client, order = await _order_of_100(db_session, make_client, make_order)
    new_client = await make_client("New Client")

    order = await OrderService(db_session).update(order, OrderUpdate(client_id=new_client.id))

    assert order.client_name == "New Client"
    assert old_client.debt == 0
    assert new_client.debt == pytest.approx(100.0)


@pytest.mark.asyncio
async def test_update_to_unknown_client(db_session: AsyncSession, make_client, make_order):
    """Moving an order to a missing client fails."""
    _, order = await _order_of_100(db_session, make_client, make_order)

    with pytest.raises(NotFoundError):
        await OrderService(db_session).update(order, OrderUpdate(client_id="missing"))


@pytest.mark.asyncio
async def test_delete_order_updates_client_debt(db_session: AsyncSession, make_client, make_order):
    """Client debt drops when an order is deleted."""
    client, order = await _order_of_100(db_session, make_client, make_order)
    service = OrderService(db_session)

    await service.delete(order)

    assert client.debt == 0
    assert await service.get_by_id(order.id) is None


@pytest.mark.asyncio
async def test_list_by_date_range(db_session: AsyncSession, make_client, make_order):
    """Only orders due within the inclusive range are returned."""
    client = await make_client()
    early = await make_order(client, due_date=date(2024, 3, 1))
    middle = await make_order(client, due_date=date(2024, 3, 15))
    await make_order(client, due_date=date(2024, 4, 2))
    await make_order(client)

    orders = await OrderService(db_session).list_by_date_range(
        date(2024, 3, 1), date(2024, 3, 31)
    )

    assert [o.id for o in orders] == [early.id, middle.id]


@pytest.mark.asyncio
async def test_list_by_date_range_rejects_inverted_range(db_session: AsyncSession):
    """Start after end is an invalid argument."""
    with pytest.raises(InvalidArgumentError):
        await OrderService(db_session).list_by_date_range(date(2024, 4, 1), date(2024, 3, 1))


@pytest.mark.asyncio
async def test_list_orders_by_client(db_session: AsyncSession, make_client, make_order):
    """Listing by client returns only that client's orders."""
    alpha = await make_client("Alpha")
    beta = await make_client("Beta")
    await make_order(alpha)
    await make_order(alpha)
    await make_order(beta)

    service = OrderService(db_session)
    assert len(await service.list_by_client(alpha.id)) == 2
    assert len(await service.list_by_client(beta.id)) == 1

    orders, total = await service.list()
    assert total == 3
    assert len(orders) == 3


@pytest.mark.asyncio
async def test_client_search_and_update(db_session: AsyncSession, make_client):
    """Name search is a case-insensitive substring match."""
    service = ClientService(db_session)
    await make_client("Escola Primária Central")
    await make_client("Hotel Central")
    other = await make_client("Farmácia Sol")

    found = await service.search_by_name("central")
    assert {c.name for c in found} == {"Escola Primária Central", "Hotel Central"}

    updated = await service.update(other, ClientUpdate(contact="sol@example.com"))
    assert updated.contact == "sol@example.com"
    assert updated.name == "Farmácia Sol"
    assert updated.debt == 0
