from __future__ import annotations

import logging

import pytest

from radarsync.config import (
    DEFAULT_SPOTIFY_SCOPES,
    ConfigurationError,
    MissingConfigurationError,
    configure_logging,
    get_blacklist,
    get_playlist_config,
    get_spotify_config,
    get_sync_config,
    merge_spotify_scopes,
    optional_env_var,
    require_env_vars,
)
from radarsync.domain.model import ArtistRef
from radarsync.domain.ports.runtime import ConfigProvider

PLAYLIST_VARS = (
    "RADARSYNC_STOCK_PLAYLIST_ID",
    "RADARSYNC_REFERENCE_PLAYLIST_ID",
    "RADARSYNC_TARGET_PLAYLIST_ID",
    "RADARSYNC_LAGGING_PLAYLIST_ID",
    "RADARSYNC_BLACKLIST_ARTIST_IDS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in PLAYLIST_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in ("SPOTIFY_CACHE_PATH", "SPOTIFY_MARKET"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_spotify_config_reads_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("SPOTIFY_CLIENT_ID", "client")
    clean_env.setenv("SPOTIFY_CLIENT_SECRET", "secret")
    clean_env.setenv("SPOTIFY_REDIRECT_URI", "http://localhost:8080")
    clean_env.setenv("SPOTIFY_MARKET", "DE")

    config = get_spotify_config()

    assert config.client_id == "client"
    assert config.redirect_uri == "http://localhost:8080"
    assert config.market == "DE"
    assert config.cache_path is None
    assert config.scope == DEFAULT_SPOTIFY_SCOPES
    assert "playlist-modify-private" in config.scope
    assert config.resilience.retry.status_forcelist >= {429, 503}


def test_spotify_config_requires_credentials(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.delenv("SPOTIFY_CLIENT_ID", raising=False)
    clean_env.setenv("SPOTIFY_CLIENT_SECRET", "secret")
    clean_env.setenv("SPOTIFY_REDIRECT_URI", "http://localhost:8080")

    with pytest.raises(MissingConfigurationError, match="SPOTIFY_CLIENT_ID"):
        get_spotify_config()


def test_merge_spotify_scopes_keeps_first_seen_order() -> None:
    assert merge_spotify_scopes(("a", "b"), ("b", "c")) == ("a", "b", "c")


def test_playlist_config_normalizes_ids(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RADARSYNC_STOCK_PLAYLIST_ID", "spotify:playlist:37i9dQZEVXbxyz")
    clean_env.setenv("RADARSYNC_REFERENCE_PLAYLIST_ID", "reference1")
    clean_env.setenv(
        "RADARSYNC_TARGET_PLAYLIST_ID", "https://open.spotify.com/playlist/target1?si=1"
    )

    config = get_playlist_config()

    assert config.stock_playlist_id == "37i9dQZEVXbxyz"
    assert config.reference_playlist_id == "reference1"
    assert config.target_playlist_id == "target1"
    assert config.lagging_playlist_id is None
    assert isinstance(config, ConfigProvider)


def test_playlist_config_rejects_malformed_ids(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RADARSYNC_STOCK_PLAYLIST_ID", "stock")
    clean_env.setenv("RADARSYNC_REFERENCE_PLAYLIST_ID", "spotify:album:abc")
    clean_env.setenv("RADARSYNC_TARGET_PLAYLIST_ID", "target")

    with pytest.raises(ConfigurationError, match="RADARSYNC_REFERENCE_PLAYLIST_ID"):
        get_playlist_config()


def test_playlist_config_requires_all_three_ids(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RADARSYNC_STOCK_PLAYLIST_ID", "stock")

    with pytest.raises(MissingConfigurationError) as exc:
        get_playlist_config()

    assert "RADARSYNC_REFERENCE_PLAYLIST_ID" in str(exc.value)
    assert "RADARSYNC_TARGET_PLAYLIST_ID" in str(exc.value)


def test_blacklist_is_empty_without_configuration(clean_env: pytest.MonkeyPatch) -> None:
    assert len(get_blacklist()) == 0


def test_blacklist_reads_comma_separated_artist_ids(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RADARSYNC_BLACKLIST_ARTIST_IDS", "artist1, spotify:artist:artist2,,")

    blacklist = get_blacklist()

    assert len(blacklist) == 2
    assert blacklist.contains(ArtistRef(name="Anyone", id="artist2"))
    assert not blacklist.contains(ArtistRef(name="Anyone", id="artist3"))


def test_blacklist_rejects_invalid_artist_ids(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("RADARSYNC_BLACKLIST_ARTIST_IDS", "spotify:track:abc")

    with pytest.raises(ConfigurationError):
        get_blacklist()


def test_sync_config_defaults_to_the_playlist_write_ceiling() -> None:
    config = get_sync_config()

    assert config.write_batch_size == 100
    assert config.allow_duplicates is False


def test_configure_logging_quiets_spotipy() -> None:
    configure_logging(level=logging.DEBUG, force=True)

    assert logging.getLogger("spotipy").level == logging.WARNING
