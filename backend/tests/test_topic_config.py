"""
Tests for topic/language resolution from the data file name
"""
from dataclasses import FrozenInstanceError

import pytest

from topicqa.core.errors import ConfigError
from topicqa.core.topic_config import TopicConfig, resolve_topic_config


@pytest.mark.parametrize(
    "file_name, topic, language",
    [
        ("arepas_de_reina_pepiada.spanish.txt", "arepas de reina pepiada", "Spanish"),
        ("python.english.txt", "python", "English"),
        ("a__b.fr.txt", "a  b", "Fr"),
        ("v1.2_release.german.txt", "v1.2 release", "German"),
        ("topic.SPANISH.txt", "topic", "SPANISH"),
        ("topic.spanish.TXT", "topic", "Spanish"),
        ("topic.spanish.Txt", "topic", "Spanish"),
        ("café.español.txt", "café", "Español"),
    ],
)
def test_resolve_valid_names(file_name, topic, language):
    """Topic underscores become spaces, language gets a capital first letter"""
    config = resolve_topic_config(file_name)
    assert config == TopicConfig(topic=topic, language=language)


def test_resolve_uses_base_name(tmp_path):
    """Directories in the path do not take part in the match"""
    path = tmp_path / "some.dir" / "history_of_rome.italian.txt"
    config = resolve_topic_config(path)
    assert config.topic == "history of rome"
    assert config.language == "Italian"


@pytest.mark.parametrize(
    "file_name",
    [
        "data.txt",
        "topic.spanish.md",
        ".spanish.txt",
        "topic..txt",
        "topic.es-ES.txt",
        "topic.spanish.txt.bak",
        "",
    ],
)
def test_resolve_invalid_names(file_name):
    """Malformed names raise ConfigError"""
    with pytest.raises(ConfigError):
        resolve_topic_config(file_name)


def test_config_error_names_the_file():
    with pytest.raises(ConfigError) as exc_info:
        resolve_topic_config("/srv/data/data.txt")
    assert exc_info.value.file_name == "data.txt"
    assert "data.txt" in str(exc_info.value)


def test_topic_config_is_immutable():
    config = resolve_topic_config("python.english.txt")
    with pytest.raises(FrozenInstanceError):
        config.topic = "other"
