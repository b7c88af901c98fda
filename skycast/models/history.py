"""Search history record model."""

import uuid
from dataclasses import asdict, dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class City:
    id: str
    name: str

    @classmethod
    def new(cls, name: str) -> "City":
        return cls(id=str(uuid.uuid4()), name=name)

    @classmethod
    def from_dict(cls, data: dict) -> "City":
        return cls(id=str(data["id"]), name=str(data["name"]))

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


HistoryList: TypeAlias = list[City]
