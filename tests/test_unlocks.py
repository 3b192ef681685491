from unlocks import check_unlocks


def test_nothing_unlocks_on_a_fresh_game(state):
    assert check_unlocks(state) == []


def test_physical_albums_milestone(state):
    state.total_completed_songs = 10
    state.current_artist.fans = 99
    assert check_unlocks(state) == []

    state.current_artist.fans = 100
    assert check_unlocks(state) == ["physical_albums"]
    assert state.unlocked_systems.physical_albums


def test_tours_need_an_album_and_tier_three(state):
    state.total_completed_songs = 50
    state.current_artist.fans = 5000
    state.total_albums_released = 1
    state.current_tech_tier = 2
    assert check_unlocks(state) == ["physical_albums"]

    state.current_tech_tier = 3
    assert check_unlocks(state) == ["tours"]


def test_platform_ownership_milestone(state):
    state.total_completed_songs = 50
    state.current_artist.fans = 10_000
    state.total_albums_released = 1
    state.total_tours_completed = 1
    state.current_tech_tier = 4
    unlocked = check_unlocks(state)
    assert unlocked == ["physical_albums", "tours", "platform_ownership"]


def test_flags_never_relock(state):
    state.total_completed_songs = 10
    state.current_artist.fans = 100
    check_unlocks(state)

    state.current_artist.fans = 0
    assert check_unlocks(state) == []
    assert state.unlocked_systems.physical_albums


def test_trend_research_has_no_milestone(state):
    state.total_completed_songs = 10**6
    state.current_artist.fans = 10**9
    state.total_albums_released = 100
    state.total_tours_completed = 100
    state.current_tech_tier = 7
    check_unlocks(state)
    assert not state.unlocked_systems.trend_research
