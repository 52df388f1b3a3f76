import pytest

from etagware import UnsupportedAlgorithm, options_from_config, options_from_environ


def test_missing_section_uses_defaults() -> None:
    options = options_from_config({})

    assert options.enabled
    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=300"
    assert not options.use_weak_etag
    assert options.etag_algorithm == "md5"


def test_section_values() -> None:
    options = options_from_config(
        {
            "http_cache": {
                "enabled": False,
                "max_age": 3600,
                "use_weak_etag": True,
                "etag_algorithm": "sha256",
            },
            "unrelated": {"max_age": 1},
        }
    )

    assert not options.enabled
    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=3600"
    assert options.use_weak_etag
    assert options.etag_algorithm == "sha256"


def test_section_can_be_none() -> None:
    assert options_from_config({"http_cache": None}).enabled


@pytest.mark.parametrize("max_age", ["60", 1.5, True])
def test_max_age_must_be_an_integer(max_age: object) -> None:
    with pytest.raises(TypeError, match="max_age"):
        options_from_config({"http_cache": {"max_age": max_age}})


def test_unknown_algorithm_in_config() -> None:
    with pytest.raises(UnsupportedAlgorithm):
        options_from_config({"http_cache": {"etag_algorithm": "md4-but-not-really"}})


def test_environ_defaults() -> None:
    options = options_from_environ({})

    assert options.enabled
    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=300"


def test_environ_values() -> None:
    options = options_from_environ(
        {
            "HTTP_CACHE_ENABLED": "off",
            "HTTP_CACHE_MAX_AGE": "120",
            "HTTP_CACHE_USE_WEAK_ETAG": "Yes",
            "HTTP_CACHE_ETAG_ALGORITHM": "sha1",
        }
    )

    assert not options.enabled
    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=120"
    assert options.use_weak_etag
    assert options.etag_algorithm == "sha1"


def test_environ_custom_prefix() -> None:
    options = options_from_environ({"APP_MAX_AGE": "5"}, prefix="APP_")

    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=5"


def test_environ_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HTTP_CACHE_USE_WEAK_ETAG", "1")

    assert options_from_environ().use_weak_etag


def test_environ_invalid_values() -> None:
    with pytest.raises(ValueError, match="HTTP_CACHE_MAX_AGE"):
        options_from_environ({"HTTP_CACHE_MAX_AGE": "soon"})

    with pytest.raises(ValueError, match="Invalid boolean value"):
        options_from_environ({"HTTP_CACHE_ENABLED": "maybe"})


def test_none_values_use_defaults() -> None:
    options = options_from_config(
        {
            "http_cache": {
                "enabled": None,
                "max_age": None,
                "use_weak_etag": None,
                "etag_algorithm": None,
            }
        }
    )

    assert options.enabled
    assert options.cache_control is not None
    assert options.cache_control.render() == "public, max-age=300"
    assert not options.use_weak_etag
    assert options.etag_algorithm == "md5"
