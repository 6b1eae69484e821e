"""Seed database from CSV files.

Usage:
    python -m app.tools.seed_db
    python -m app.tools.seed_db --data-dir data
    python -m app.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.csv_loader.loader import load_crews, load_sites, load_tickets
from app.adapters.persistence.database import async_session_factory
from app.adapters.persistence.models import (
    CrewModel,
    CrewRouteModel,
    CrewTicketStateModel,
    SiteModel,
    TicketModel,
    TicketStateCatalogModel,
)
from app.config import settings
from app.domain.value_objects.enums import DEFAULT_TICKET_STATES, CrewState, TicketState

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def _parse_datetime(raw: str | None) -> datetime | None:
    """Parse timestamps in the formats found in ticket exports (assumed UTC)."""
    if not raw:
        return None
    for fmt in (
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%d",
        "%d/%m/%Y %H:%M",
        "%d/%m/%Y",
    ):
        try:
            return datetime.strptime(raw.strip(), fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    logger.warning("Could not parse date: %s", raw)
    return None


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [
        CrewRouteModel,
        CrewTicketStateModel,
        TicketModel,
        CrewModel,
        SiteModel,
        TicketStateCatalogModel,
    ]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def _seed_states(session: AsyncSession) -> int:
    existing = set((await session.execute(select(TicketStateCatalogModel.name))).scalars())
    added = 0
    for state in DEFAULT_TICKET_STATES:
        if state["name"] in existing:
            continue
        session.add(TicketStateCatalogModel(**state))
        added += 1
    await session.commit()
    return added


async def _seed_sites(session: AsyncSession, csv_path: Path) -> int:
    existing = set((await session.execute(select(SiteModel.code))).scalars())
    added = 0
    for sd in load_sites(csv_path):
        if sd["code"] in existing:
            logger.debug("Site '%s' already exists, skipping", sd["code"])
            continue
        session.add(SiteModel(**sd))
        existing.add(sd["code"])
        added += 1
    await session.commit()
    return added


async def _seed_crews(session: AsyncSession, csv_path: Path) -> int:
    existing = set((await session.execute(select(CrewModel.code))).scalars())
    added = 0
    for cd in load_crews(csv_path):
        if cd["code"] in existing:
            logger.debug("Crew '%s' already exists, skipping", cd["code"])
            continue
        skills = cd["skills"] + [None] * (3 - len(cd["skills"]))
        session.add(
            CrewModel(
                code=cd["code"],
                name=cd["name"],
                latitude=cd["latitude"],
                longitude=cd["longitude"],
                active=cd["active"],
                category=cd["category"],
                state=cd["state"] or CrewState.AVAILABLE.value,
                skill_1=skills[0],
                skill_2=skills[1],
                skill_3=skills[2],
            )
        )
        existing.add(cd["code"])
        added += 1
    await session.commit()
    return added


async def _seed_tickets(session: AsyncSession, csv_path: Path) -> int:
    """Import tickets, each with an opening history row."""
    added = 0
    now = datetime.now(timezone.utc)
    for td in load_tickets(csv_path):
        created_by = td["created_by"] or settings.default_user
        state = td["state"] or TicketState.NEW.value
        ticket = TicketModel(
            **{k: v for k, v in td.items() if k not in ("fault_occur_time", "created_by", "state")},
            state=state,
            created_by=created_by,
            fault_occur_time=_parse_datetime(td["fault_occur_time"]) or now,
        )
        session.add(ticket)
        await session.flush()
        session.add(
            CrewTicketStateModel(
                ticket_id=ticket.id,
                crew_id=None,
                assigned_at=now,
                created_by=created_by,
                state=state,
            )
        )
        added += 1
    await session.commit()
    return added


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"states": 0, "sites": 0, "crews": 0, "tickets": 0}

    site_csv = _find_csv(data_dir, ["sites", "site"])
    crew_csv = _find_csv(data_dir, ["crews", "cuadrillas", "crew"])
    ticket_csv = _find_csv(data_dir, ["tickets", "ticket"])

    if not site_csv:
        raise FileNotFoundError(f"No sites CSV found in {data_dir}. Expected something like sites.csv")

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        counts["states"] = await _seed_states(session)
        counts["sites"] = await _seed_sites(session, site_csv)

        if crew_csv:
            counts["crews"] = await _seed_crews(session, crew_csv)
        else:
            logger.info("No crews CSV found — skipping crew import")

        if ticket_csv:
            counts["tickets"] = await _seed_tickets(session, ticket_csv)
        else:
            logger.info("No tickets CSV found — skipping ticket import")

    logger.info(
        "Seed complete: %d states, %d sites, %d crews, %d tickets",
        counts["states"], counts["sites"], counts["crews"], counts["tickets"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints (hints tried in order)."""
    files = sorted(data_dir.glob("*.csv"))
    for hint in name_hints:
        for f in files:
            if hint in f.stem.lower():
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        async def count(*conditions, model):
            return (await session.execute(select(func.count(model.id)).where(*conditions))).scalar()

        sites = await count(model=SiteModel)
        located_sites = await count(SiteModel.latitude.is_not(None), model=SiteModel)
        crews = await count(model=CrewModel)
        located_crews = await count(CrewModel.latitude.is_not(None), model=CrewModel)
        tickets = await count(model=TicketModel)
        categories = dict(
            (await session.execute(
                select(CrewModel.category, func.count(CrewModel.id)).group_by(CrewModel.category)
            )).all()
        )

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Sites:   {sites} ({located_sites} with coordinates)")
        print(f"Crews:   {crews} ({located_crews} with coordinates)")
        print(f"Tickets: {tickets}")
        print(f"Crew categories: {categories}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the field operations database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing CSV files (default: CSV_DATA_PATH or data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
