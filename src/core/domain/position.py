"""
Position — Модель позиции по продукту

Immutable Pydantic модель: позиция по каждой торговой книге (book → signed quantity).

Инварианты:
- aggregate_position() == сумма позиций по всем книгам
- позиция может быть отрицательной (short)
- позиция только накапливается: add_position() возвращает новый экземпляр
"""

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field, field_serializer, field_validator

from .product import Bond


class Position(BaseModel):
    """
    Позиция по продукту в разрезе книг.

    Immutable модель (frozen=True). Все изменения создают новый экземпляр.
    """

    product: Bond
    books: Mapping[str, int] = Field(
        default_factory=dict,
        validate_default=True,
        description="Позиция по книгам (book → signed quantity)",
    )

    model_config = {"frozen": True}

    @field_validator("books")
    @classmethod
    def freeze_books(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        """Read-only копия словаря книг"""
        return MappingProxyType(dict(v))

    @field_serializer("books")
    def serialize_books(self, v: Mapping[str, int]) -> dict[str, int]:
        return dict(v)

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def get_position(self, book: str) -> int:
        """
        Позиция по книге.

        Args:
            book: Имя книги

        Returns:
            Signed quantity (0 если по книге не было сделок)
        """
        return self.books.get(book, 0)

    def add_position(self, book: str, quantity: int) -> "Position":
        """
        Добавление количества в книгу.

        Args:
            book: Имя книги
            quantity: Signed quantity (+ покупка, − продажа)

        Returns:
            Новая Position с обновлённой книгой
        """
        books = dict(self.books)
        books[book] = books.get(book, 0) + quantity
        return Position(product=self.product, books=books)

    def merge(self, other: "Position") -> "Position":
        """
        Аддитивное слияние: каждая книга other прибавляется к этой позиции.

        Raises:
            ValueError: Если позиции по разным продуктам
        """
        if other.product_id != self.product_id:
            raise ValueError(
                f"cannot merge position in {other.product_id} into {self.product_id}"
            )
        books = dict(self.books)
        for book, quantity in other.books.items():
            books[book] = books.get(book, 0) + quantity
        return Position(product=self.product, books=books)

    def aggregate_position(self) -> int:
        """Суммарная позиция по всем книгам"""
        return sum(self.books.values())

    def to_fields(self) -> list[str]:
        """product_id, затем пары (book, quantity) в порядке имён книг"""
        fields = [self.product_id]
        for book in sorted(self.books):
            fields.extend([book, str(self.books[book])])
        return fields
