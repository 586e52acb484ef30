# bakery_pos/services/cart.py
from decimal import Decimal
from typing import Iterable

from bakery_pos.core.errors import ValidationError
from bakery_pos.models.catalog import ItemDB
from bakery_pos.models.sale import Cart, CartDraft, CartLine, money


def line_amount(qty: int, unit_price: Decimal) -> Decimal:
    return money(qty * unit_price)


class CartBuilder:
    def __init__(self, items: Iterable[ItemDB]):
        self.items = {item.id: item for item in items}

    def _line_at(self, cart: Cart, index: int) -> CartLine:
        if index < 0 or index >= len(cart.lines):
            raise ValidationError(f"No cart line at position {index}")
        return cart.lines[index]

    def add_line(self, cart: Cart, item_id: str, quantity: int) -> CartLine:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        item = self.items.get(item_id)
        if item is None:
            raise ValidationError(f"Unknown item {item_id}")

        for line in cart.lines:
            if line.item_id == item_id:
                line.qty += quantity
                line.amount = line_amount(line.qty, line.unit_price)
                return line

        line = CartLine(
            item_id=item.id,
            name=item.name,
            qty=quantity,
            unit_price=money(item.unit_price),
            amount=line_amount(quantity, item.unit_price),
        )
        cart.lines.append(line)
        return line

    def update_line_quantity(self, cart: Cart, index: int, quantity: int) -> CartLine:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        line = self._line_at(cart, index)
        line.qty = quantity
        line.amount = line_amount(quantity, line.unit_price)
        return line

    def remove_line(self, cart: Cart, index: int) -> CartLine:
        self._line_at(cart, index)
        return cart.lines.pop(index)

    @staticmethod
    def total(cart: Cart) -> Decimal:
        return cart.total()

    @staticmethod
    def verify(cart: Cart) -> Decimal:
        """Recompute every amount from qty x price and check the stored ones agree."""
        recomputed = Decimal("0")
        for line in cart.lines:
            expected = line_amount(line.qty, line.unit_price)
            if line.amount != expected:
                raise ValidationError(f"Line amount for {line.name} does not match qty x unit price")
            recomputed += expected
        total = cart.total()
        if money(recomputed) != total:
            raise ValidationError("Cart total does not match its lines")
        return total

    def build(self, draft: CartDraft) -> Cart:
        cart = Cart(bakery_id=draft.bakery_id)
        for line in draft.lines:
            self.add_line(cart, line.item_id, line.qty)
        return cart
