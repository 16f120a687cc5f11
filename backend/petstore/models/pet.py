"""Pet ORM — row mapping for the pets table.

Invariants:
    - id is a caller-supplied BIGINT primary key (no autoincrement)
    - name is non-nullable text; tag is nullable (NULL == absent)

Design Decisions:
    - Row class kept separate from core.pet.Pet: the core never sees ORM state
"""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from petstore.core.pet import Pet
from petstore.db.base import Base


class PetRow(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    tag: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_pet(self) -> Pet:
        return Pet(id=self.id, name=self.name, tag=self.tag)
