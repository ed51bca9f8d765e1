import asyncio

from conftest import DIVISIONS_CSV, REGISTRY_URL, SheetServer

from leaguedata.models.enums import REQUIRED_RESOURCES, ResourceKind
from leaguedata.sources.cache import LeagueCache
from leaguedata.sources.league_loader import LeagueLoader


def loader_for(server, league_name="Test League", cache=None):
    return LeagueLoader(
        league_name, fetcher=server.fetcher(), cache=cache, registry_url=REGISTRY_URL
    )


def test_load_all(sheet_server):
    data = asyncio.run(loader_for(sheet_server).load_all())
    assert data.unavailable == []
    assert len(data.divisions) == 3
    assert [c.name for c in data.conferences] == ["Monday", "Tuesday"]
    assert len(data.teams) == 3
    assert len(data.standings) == 3
    assert data.schedule.week == 3
    assert len(data.schedule.games) == 5
    assert len(data.player_stats) == 5
    assert len(data.goalie_stats) == 3
    # no playoff stat columns configured
    assert data.playoff_player_stats == []
    assert data.is_available(ResourceKind.PLAYOFF_PLAYER_STATS)


def test_each_resource_is_fetched_once_per_run(sheet_server):
    asyncio.run(loader_for(sheet_server).load_all())
    assert sheet_server.count("/registry.csv") == 1
    # divisions feed divisions, conferences and the schedule join
    assert sheet_server.count("/divisions.csv") == 1
    assert sheet_server.count("/schedule.csv") == 1


def test_a_new_run_refetches(sheet_server):
    loader = loader_for(sheet_server)
    asyncio.run(loader.load_all())
    asyncio.run(loader.load_all())
    assert sheet_server.count("/registry.csv") == 2
    assert sheet_server.count("/standings.csv") == 2


def test_failed_resource_degrades_to_empty_collection():
    server = SheetServer(failing={"/goalies.csv"})
    data = asyncio.run(loader_for(server).load_all())
    assert data.goalie_stats == []
    assert data.unavailable == [ResourceKind.GOALIE_STATS]
    assert not data.is_available(ResourceKind.GOALIE_STATS)
    assert len(data.player_stats) == 5


def test_failed_divisions_still_load_the_schedule_unjoined():
    server = SheetServer(failing={"/divisions.csv"})
    data = asyncio.run(loader_for(server).load_all())
    assert data.divisions == [] and data.conferences == []
    assert data.unavailable == [ResourceKind.DIVISION_INFO]
    assert len(data.schedule.games) == 5
    assert not any(game.division1.is_resolved for game in data.schedule.games)


def test_unknown_league_marks_everything_unavailable(sheet_server):
    data = asyncio.run(loader_for(sheet_server, "Unknown League").load_all())
    assert data.unavailable == list(REQUIRED_RESOURCES)
    assert data.divisions == [] and data.schedule.games == []
    assert sheet_server.count("/divisions.csv") == 0


def test_individual_loads_share_the_cache(sheet_server):
    cache = LeagueCache()
    loader = loader_for(sheet_server, cache=cache)

    async def load():
        return await asyncio.gather(loader.load_divisions(), loader.load_conferences())

    divisions, conferences = asyncio.run(load())
    assert len(divisions) == 3 and len(conferences) == 2
    assert sheet_server.count("/divisions.csv") == 1
    assert cache.cached_rows("test league", ResourceKind.DIVISION_INFO) is not None


def test_playoff_stats_when_configured():
    server = SheetServer()
    server.resources["/registry.csv"] = server.resources["/registry.csv"].replace(
        "https://sheets.test/players.csv,,\n",
        "https://sheets.test/players.csv,https://sheets.test/goalies.csv,"
        "https://sheets.test/players.csv\n",
        1,
    )
    data = asyncio.run(loader_for(server).load_all())
    assert len(data.playoff_player_stats) == 5
    assert len(data.playoff_goalie_stats) == 3


def test_local_files_load_like_sheets(tmp_path):
    path = tmp_path / "divisions.csv"
    path.write_text(DIVISIONS_CSV, encoding="utf-8")
    registry = tmp_path / "registry.csv"
    registry.write_text(
        "LEAGUE,DIVISION INFO,TEAM INFO,SCHEDULE,STANDINGS,GOALIE STATS,PLAYER STATS\n"
        f"Local,{path},{path},{path},{path},{path},{path}\n",
        encoding="utf-8",
    )
    loader = LeagueLoader("Local", registry_url=str(registry))

    async def load():
        try:
            return await loader.load_divisions()
        finally:
            await loader.close()

    assert len(asyncio.run(load())) == 3


def test_undecodable_local_registry_marks_everything_unavailable(tmp_path):
    registry = tmp_path / "registry.csv"
    registry.write_bytes(b"LEAGUE,DIVISION INFO\n\xff\xfe bad,x\n")
    loader = LeagueLoader("Local", registry_url=str(registry))

    async def load():
        try:
            return await loader.load_all()
        finally:
            await loader.close()

    data = asyncio.run(load())
    assert data.unavailable == list(REQUIRED_RESOURCES)
    assert data.divisions == []
