"""Tests des services / Service tests."""

import asyncio
from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from smartpass.errors import ConflictError, NotFoundError, TransientError
from smartpass.models.scan_record import ScanRecord, TripWindow, Verdict
from smartpass.services.decision import Reason
from smartpass.services.directory import CredentialDirectory, RouteRegistry
from smartpass.services.ledger import ScanLedger
from smartpass.services.trip_window import TripWindowService
from smartpass.services.verification import VerificationService
from smartpass.services.whitelist import WhitelistService
from smartpass.utils.seed import seed_demo_data


async def _count_records(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count(ScanRecord.id)))


async def _verify(session_factory, clock, credential_id, route_id):
    async with session_factory() as session:
        return await VerificationService(session, clock=clock).verify(credential_id, route_id)


def test_trip_window_split():
    assert TripWindowService.window_for(datetime(2026, 10, 20, 0, 0)) == TripWindow.MORNING
    assert TripWindowService.window_for(datetime(2026, 10, 20, 12, 59)) == TripWindow.MORNING
    assert TripWindowService.window_for(datetime(2026, 10, 20, 13, 0)) == TripWindow.AFTERNOON
    assert TripWindowService.window_for(datetime(2026, 10, 20, 23, 59)) == TripWindow.AFTERNOON


def test_trip_window_custom_split():
    assert TripWindowService.window_for(datetime(2026, 10, 20, 11, 30), split_hour=11) == TripWindow.AFTERNOON


def test_calendar_date():
    assert TripWindowService.calendar_date(datetime(2026, 10, 20, 8, 5)) == "2026-10-20"


async def test_boarding_scenario(seeded, session_factory, clock):
    clock.set(8, 5)
    first = await _verify(session_factory, clock, "S001", "B101")
    assert first.verdict == Verdict.VALID
    assert "Morning Trip" in first.message

    clock.set(8, 10)
    second = await _verify(session_factory, clock, "S001", "B101")
    assert second.verdict == Verdict.DUPLICATE

    clock.set(8, 15)
    third = await _verify(session_factory, clock, "S001", "B102")
    assert third.verdict == Verdict.INVALID
    assert "expected B101" in third.message

    assert await _count_records(session_factory) == 3


async def test_unpaid_never_boards(seeded, session_factory, clock):
    for hour in (7, 12, 13, 18):
        clock.set(hour)
        for route_id in ("B101", "B102"):
            decision = await _verify(session_factory, clock, "S002", route_id)
            assert decision.verdict == Verdict.INVALID
            assert decision.reason == Reason.UNPAID


async def test_wrong_route_is_invalid(seeded, session_factory, clock):
    decision = await _verify(session_factory, clock, "S003", "B101")
    assert decision.verdict == Verdict.INVALID
    assert decision.reason == Reason.WRONG_ROUTE
    assert decision.message == "Wrong route, expected B102."


async def test_unknown_credential_is_logged(seeded, session_factory, clock):
    decision = await _verify(session_factory, clock, "X999", "B101")
    assert decision.verdict == Verdict.INVALID
    assert "not found in system" in decision.message
    assert decision.credential is None

    async with session_factory() as session:
        total, records = await ScanLedger(session).find(credential_id="X999")
    assert total == 1
    assert records[0].verdict == Verdict.INVALID


async def test_repeated_scans_valid_once(seeded, session_factory, clock):
    verdicts = []
    for minute in range(0, 50, 10):
        clock.set(9, minute)
        verdicts.append((await _verify(session_factory, clock, "S001", "B101")).verdict)
    assert verdicts == [Verdict.VALID] + [Verdict.DUPLICATE] * 4


async def test_trip_window_boundary_independence(seeded, session_factory, clock):
    clock.set(12, 59)
    assert (await _verify(session_factory, clock, "S001", "B101")).verdict == Verdict.VALID

    clock.set(13, 1)
    afternoon = await _verify(session_factory, clock, "S001", "B101")
    assert afternoon.verdict == Verdict.VALID
    assert afternoon.trip_window == TripWindow.AFTERNOON

    clock.set(13, 5)
    assert (await _verify(session_factory, clock, "S001", "B101")).verdict == Verdict.DUPLICATE


async def test_next_day_boards_again(seeded, session_factory, clock):
    clock.set(8, 0, day=20)
    assert (await _verify(session_factory, clock, "S001", "B101")).verdict == Verdict.VALID
    clock.set(8, 0, day=21)
    assert (await _verify(session_factory, clock, "S001", "B101")).verdict == Verdict.VALID


async def test_concurrent_scans_single_valid(seeded, session_factory, clock):
    clock.set(8, 30)
    attempts = 8
    decisions = await asyncio.gather(*(
        _verify(session_factory, clock, "S001", "B101") for _ in range(attempts)
    ))
    verdicts = [d.verdict for d in decisions]
    assert verdicts.count(Verdict.VALID) == 1
    assert verdicts.count(Verdict.DUPLICATE) == attempts - 1
    assert await _count_records(session_factory) == attempts


async def test_ledger_rejects_second_valid(seeded, session_factory, clock):
    async with session_factory() as session:
        service = VerificationService(session, clock=clock)
        decision = await service.verify("S001", "B101")
        assert decision.verdict == Verdict.VALID

        with pytest.raises(ConflictError):
            await service.ledger.append(decision, "S001", "B101", clock())


async def test_store_failure_is_transient_and_unlogged(seeded, session_factory, clock, monkeypatch):
    async def broken_append(*args, **kwargs):
        raise OperationalError("INSERT INTO scan_records", {}, Exception("disk I/O error"))

    async with session_factory() as session:
        service = VerificationService(session, clock=clock)
        monkeypatch.setattr(service.ledger, "append", broken_append)
        with pytest.raises(TransientError):
            await service.verify("S001", "B101")

    assert await _count_records(session_factory) == 0


async def test_whitelist_fidelity(seeded, db):
    entries = await WhitelistService(db).entries_for("B101")
    assert [e.credential_id for e in entries] == ["S001", "S004"]
    assert entries[0].name == "Asha Verma"
    assert await WhitelistService(db).entries_for("B999") == []


async def test_directory_duplicate_id(seeded, db):
    with pytest.raises(ConflictError):
        await CredentialDirectory(db).create({"id": "S001", "name": "Someone", "assigned_route_id": "B101"})


async def test_route_delete_guard(seeded, db):
    registry = RouteRegistry(db)
    with pytest.raises(ConflictError):
        await registry.delete("B101")
    with pytest.raises(NotFoundError):
        await registry.delete("B999")

    await registry.delete("B103")
    assert await registry.get("B103") is None


async def test_route_delete_after_reassign(seeded, db):
    registry = RouteRegistry(db)
    await registry.directory.update("S003", {"assigned_route_id": "B101"})
    await registry.delete("B102")
    assert [r.id for r in await registry.find_all()] == ["B101", "B103"]


async def test_route_password_is_hashed(db):
    route = await RouteRegistry(db).create({
        "id": "B200", "route_name": "Airport", "driver_name": "Anil", "capacity": 30,
        "conductor_password": "buspass",
    })
    assert route.conductor_credential_hash != "buspass"
    assert route.conductor_credential_hash.startswith("$2")


async def test_seed_demo_data_once(db):
    await seed_demo_data(db)
    await seed_demo_data(db)
    credentials = await CredentialDirectory(db).find()
    assert [c.id for c in credentials] == ["S001", "S002", "S003"]
    assert [r.id for r in await RouteRegistry(db).find_all()] == ["B101", "B102"]


async def test_seed_skipped_when_routes_exist(db):
    await RouteRegistry(db).create({
        "id": "B101", "route_name": "Existing", "driver_name": "Anil", "capacity": 20,
        "conductor_password": "buspass",
    })
    await seed_demo_data(db)
    assert await CredentialDirectory(db).find() == []
    assert [r.route_name for r in await RouteRegistry(db).find_all()] == ["Existing"]
