"""
Topic/language resolution from the reference data file name
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from topicqa.core.errors import ConfigError

# <topic>.<language>.txt; the topic keeps any inner dots
DATA_FILE_PATTERN = re.compile(r"(?P<topic>.+)\.(?P<language>\w+)\.[tT][xX][tT]")


@dataclass(frozen=True)
class TopicConfig:
    """Topic and answer language served by this process"""
    topic: str
    language: str


def resolve_topic_config(file_name: Union[str, Path]) -> TopicConfig:
    """
    Derive the topic and language from a data file name.

    Only the base name is considered, so a full path may be passed.
    `arepas_de_reina_pepiada.spanish.txt` gives topic
    `arepas de reina pepiada` and language `Spanish`.

    Raises:
        ConfigError: if the name does not look like `{topic}.{language}.txt`
    """
    base_name = Path(file_name).name
    match = DATA_FILE_PATTERN.fullmatch(base_name)
    if match is None:
        raise ConfigError(base_name)

    topic = match.group("topic").replace("_", " ")
    language = match.group("language")
    language = language[0].upper() + language[1:]
    return TopicConfig(topic=topic, language=language)
