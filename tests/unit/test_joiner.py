"""Unit tests for the performer joiner."""

from __future__ import annotations

import pytest

from groupie_tracker.models.catalog import CatalogSection, Performer, VenueRecord
from groupie_tracker.services.catalog_store import CatalogStore
from groupie_tracker.services.joiner import PerformerJoiner, join_in_snapshot
from groupie_tracker.utils.errors import NotFoundError


class TestPerformerJoiner:
    """Tests for PerformerJoiner and the snapshot join helpers."""

    @pytest.mark.asyncio
    async def test_join_attaches_all_sections(self, store: CatalogStore) -> None:
        record = await PerformerJoiner(store).join(2)

        assert record.performer.name == "Pink Floyd"
        assert record.venues == ["london-uk", "dusseldorf-germany"]
        assert record.dates == ["09-05-2019", "07-05-2019"]
        assert record.dates_venues == {
            "london-uk": ["09-05-2019"],
            "dusseldorf-germany": ["07-05-2019"],
        }
        assert record.first_album_year == 1967
        assert record.missing == []

    @pytest.mark.asyncio
    async def test_unknown_id_raises(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await PerformerJoiner(store).join(99)
        assert exc_info.value.performer_id == 99

    @pytest.mark.asyncio
    async def test_missing_sections_are_reported(self, performers: list[Performer]) -> None:
        store = CatalogStore()
        await store.replace_performers(performers)
        await store.replace_venues([VenueRecord(id=1, locations=["georgia-usa"])])

        record = await PerformerJoiner(store).join(1)
        assert record.venues == ["georgia-usa"]
        assert record.dates == []
        assert record.dates_venues == {}
        assert record.missing == [CatalogSection.DATES, CatalogSection.RELATIONS]

    @pytest.mark.asyncio
    async def test_performers_only(self, performers: list[Performer]) -> None:
        store = CatalogStore()
        await store.replace_performers(performers)

        record = await PerformerJoiner(store).join(3)
        assert record.name == "Phil Collins"
        assert record.missing == [
            CatalogSection.VENUES,
            CatalogSection.DATES,
            CatalogSection.RELATIONS,
        ]

    @pytest.mark.asyncio
    async def test_join_in_snapshot_matches_join(self, store: CatalogStore) -> None:
        async with store.read() as snapshot:
            direct = join_in_snapshot(snapshot, 1)
            via_static = PerformerJoiner.join_in(snapshot, 1)
        assert direct == via_static
        assert direct == await PerformerJoiner(store).join(1)
