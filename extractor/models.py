from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class RecordError(ValueError):
    """Raised when a match does not carry every field a record needs."""


class CallingCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    code2: str = Field(min_length=1)  # alpha-2 code
    code3: str = Field(min_length=1)  # alpha-3 code
    code: str = Field(min_length=1)  # calling code

    @property
    def key(self) -> tuple:
        return (self.code2, self.code3)

    @classmethod
    def from_groups(cls, groups: Mapping[str, Optional[str]]) -> "CallingCode":
        """Build a record from regex named groups, rejecting missing or empty fields."""
        try:
            return cls(
                code2=groups.get('code2'),
                code3=groups.get('code3'),
                code=groups.get('code'),
            )
        except ValidationError as e:
            fields = sorted({str(err['loc'][0]) for err in e.errors() if err.get('loc')})
            raise RecordError(f"Invalid record fields {fields} in match {dict(groups)}") from e
