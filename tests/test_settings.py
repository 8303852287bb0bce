import pytest

from instafilter.core import InvalidParameterError
from instafilter.services import Settings


def test_defaults_without_file():
    settings = Settings()
    assert settings.path is None
    assert settings.batch_size == 6
    assert settings.thumbnail_size == 150
    assert settings.max_workers == 6
    assert settings.log_level == "INFO"


def test_missing_file_falls_back_to_defaults(tmp_path):
    settings = Settings(tmp_path / "nope.ini")
    assert settings.batch_size == 6


def test_reads_ini_file(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text("[thumbnails]\nbatch_size = 3\nsize = 96\n\n[engine]\nlog_level = debug\n")

    settings = Settings(path)
    assert settings.batch_size == 3
    assert settings.thumbnail_size == 96
    assert settings.max_workers == 6
    assert settings.log_level == "DEBUG"


def test_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.ini"
    path.write_text("[thumbnails]\nmax_workers = 2\n")
    monkeypatch.setenv(Settings.ENV_VAR, str(path))

    assert Settings().max_workers == 2


@pytest.mark.parametrize(
    "body",
    [
        "[thumbnails]\nbatch_size = six\n",
        "[thumbnails]\nsize = 0\n",
        "[thumbnails]\nmax_workers = -1\n",
        "[engine]\nlog_level = LOUD\n",
    ],
)
def test_invalid_values_raise(tmp_path, body):
    path = tmp_path / "bad.ini"
    path.write_text(body)
    settings = Settings(path)
    with pytest.raises(InvalidParameterError):
        settings.batch_size, settings.thumbnail_size, settings.max_workers, settings.log_level


def test_save_round_trip(tmp_path):
    settings = Settings()
    settings.set_batch_size(4)
    settings.set_thumbnail_size(200)
    settings.set_log_level("warning")

    path = settings.save(tmp_path / "nested" / "settings.ini")
    assert path.exists()
    assert settings.path == path

    reloaded = Settings(path)
    assert reloaded.batch_size == 4
    assert reloaded.thumbnail_size == 200
    assert reloaded.log_level == "WARNING"


def test_setters_validate():
    settings = Settings()
    with pytest.raises(InvalidParameterError):
        settings.set_batch_size(0)
    with pytest.raises(InvalidParameterError):
        settings.set_max_workers(2.5)
    with pytest.raises(InvalidParameterError):
        settings.set_log_level("VERBOSE")


def test_save_without_path():
    with pytest.raises(InvalidParameterError):
        Settings().save()
