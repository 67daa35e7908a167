"""
Tests for reopening sold lots
"""
import pytest
from sqlmodel import Session, select

from models import Balance, Client, Document, HavahillsProperty, LivingWaterProperty
from services import reopen_service
from services.inventory_service import PropertyNotFoundError, PropertyStateError, get_property
from services.reopen_service import ReopenError, reopen_property

LIVING_WATER = LivingWaterProperty.PROJECT_NAME
HAVAHILLS = HavahillsProperty.PROJECT_NAME


def names_in(engine, model):
    with Session(engine) as session:
        return sorted(row.name for row in session.exec(select(model)).all())


def assert_reset(engine, model, block, lot):
    record = get_property(engine, model.PROJECT_NAME, block, lot)
    assert record["Status"] == "Available"
    for column in model.CLEARED_ON_REOPEN:
        assert record[column] is None, column
    return record


def test_reopen_living_water_lot(seeded):
    result = reopen_property(seeded, LIVING_WATER, "3", "7")

    record = assert_reset(seeded, LivingWaterProperty, "3", "7")
    assert record["TCP"] == 1100000.0
    assert result.buyer_name == "Juan Dela Cruz"
    assert result.deleted == {"Clients": 1, "Documents": 2, "Balance": 1}
    assert result.cleanup_failures == []
    assert result.property["Status"] == "Available"

    assert names_in(seeded, Client) == ["Ana Reyes", "Maria Santos"]
    assert names_in(seeded, Document) == ["Ana Reyes"]
    assert names_in(seeded, Balance) == ["Ana Reyes"]


def test_reopen_havahills_lot_uses_buyers_name(seeded):
    result = reopen_property(seeded, HAVAHILLS, "2", "9")

    record = assert_reset(seeded, HavahillsProperty, "2", "9")
    assert record["TSP"] == 2400000.0
    assert result.buyer_name == "Ana Reyes"
    assert "Ana Reyes" not in names_in(seeded, Client)
    assert "Juan Dela Cruz" in names_in(seeded, Client)


@pytest.mark.parametrize("failing_model", [Client, Document, Balance])
def test_lot_is_reset_even_when_a_cleanup_delete_fails(seeded, failing_model):
    failing_model.__table__.drop(seeded)

    result = reopen_property(seeded, LIVING_WATER, "3", "7")

    assert_reset(seeded, LivingWaterProperty, "3", "7")
    assert result.cleanup_failures == [failing_model.__tablename__]
    for model in (Client, Document, Balance):
        if model is not failing_model:
            assert "Juan Dela Cruz" not in names_in(seeded, model)


def test_reopen_after_reserve_and_sell_returns_lot_to_inventory(seeded):
    from services.inventory_service import fetch_available
    from services.reservation_service import ReservationCommitter, mark_sold

    lot = get_property(seeded, HAVAHILLS, "1", "4")
    ReservationCommitter(seeded).commit(lot, {"Buyers Name": "Jane Doe", "Agent": "Leo Tan"})
    mark_sold(seeded, HAVAHILLS, "1", "4")

    reopen_property(seeded, HAVAHILLS, "1", "4")

    available = fetch_available(seeded, HAVAHILLS)
    assert [(p["Block"], p["Lot"], p["Buyers Name"], p["Agent"]) for p in available] == [("1", "4", None, None)]


def test_blank_buyer_name_skips_cleanup(seeded):
    result = reopen_property(seeded, LIVING_WATER, "4", "2")

    assert_reset(seeded, LivingWaterProperty, "4", "2")
    assert result.buyer_name is None
    assert result.deleted == {}
    assert len(names_in(seeded, Client)) == 3


def test_only_sold_lots_can_be_reopened(seeded):
    with pytest.raises(PropertyStateError):
        reopen_property(seeded, LIVING_WATER, "1", "1")
    with pytest.raises(PropertyStateError):
        reopen_property(seeded, LIVING_WATER, "5", "12")

    assert get_property(seeded, LIVING_WATER, "1", "1")["Owner"] == "Maria Santos"


def test_missing_lot(seeded):
    with pytest.raises(PropertyNotFoundError):
        reopen_property(seeded, LIVING_WATER, "99", "1")


def test_failed_status_reset_raises_after_cleanup(seeded, monkeypatch):
    def broken_update(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(reopen_service, "update", broken_update)

    with pytest.raises(ReopenError):
        reopen_property(seeded, LIVING_WATER, "3", "7")

    # Cleanup already ran; the lot keeps its Sold status
    assert "Juan Dela Cruz" not in names_in(seeded, Client)
    assert get_property(seeded, LIVING_WATER, "3", "7")["Status"] == "Sold"


def test_buyer_rows_match_the_stored_name_exactly(seeded):
    with Session(seeded) as session:
        session.add(LivingWaterProperty(block="6", lot="8", status="Sold", owner=" Rosa Lim "))
        session.add(Client(name=" Rosa Lim ", email="rosa@example.com"))
        session.add(Document(name=" Rosa Lim ", tin_id="555-111-222"))
        session.commit()

    result = reopen_property(seeded, LIVING_WATER, "6", "8")

    assert result.buyer_name == " Rosa Lim "
    assert result.deleted == {"Clients": 1, "Documents": 1, "Balance": 0}
    assert " Rosa Lim " not in names_in(seeded, Client)
    assert_reset(seeded, LivingWaterProperty, "6", "8")


def test_whitespace_only_buyer_name_skips_cleanup(seeded):
    with Session(seeded) as session:
        session.add(LivingWaterProperty(block="6", lot="9", status="Sold", owner="   "))
        session.commit()

    result = reopen_property(seeded, LIVING_WATER, "6", "9")

    assert result.buyer_name is None
    assert result.deleted == {}
    assert len(names_in(seeded, Client)) == 3
