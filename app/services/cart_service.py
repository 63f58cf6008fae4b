from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.cart_item import CartItemModel
from app.domain.cart_rules import find_issue, group_by_vendor
from app.domain.errors import BadRequestError, ForbiddenError, NotFoundError
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.settings import MAX_CART_QUANTITY
from app.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Prosta implementacja cqrs i proste use case dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (get, validate) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        #najnowsze na gorze
        items = self.repo.get_cart_items(user_id, newest_first=True)

        #grupowanie po sprzedawcy, kazdy wysyla osobno
        vendors = []
        for vendor_id, group in group_by_vendor(items).items():
            vendor = group[0].product.vendor
            vendors.append(
                {
                    "vendor_id": vendor_id,
                    "shop_name": vendor.shop_name,
                    "vendor_name": vendor.user.name if vendor.user else None,
                    "items": [
                        {
                            "id": i.id,
                            "product_id": i.product_id,
                            "product_name": i.product.name,
                            "quantity": i.quantity,
                            "price": i.product.price,
                            "stock": i.product.stock,
                        }
                        for i in group
                    ],
                    "subtotal": sum((i.product.price * i.quantity for i in group), Decimal("0.00")),
                    "item_count": sum(i.quantity for i in group),
                }
            )

        #dict przyksztalcany w jsona
        return {
            "vendors": vendors,
            "summary": {
                "grand_total": sum((v["subtotal"] for v in vendors), Decimal("0.00")),
                "total_items": sum(v["item_count"] for v in vendors),
                "vendor_count": len(vendors),
            },
        }

    def validate_cart(self, user_id: int) -> Dict[str, Any]:
        """
        Sprawdzenie koszyka przed checkoutem, nic nie zmienia.
        Checkout i tak waliduje jeszcze raz w transakcji.
        """
        issues = []
        for item in self.repo.get_cart_items(user_id):
            issue = find_issue(item)
            if issue:
                issues.append(
                    {
                        "cart_item_id": item.id,
                        "product_name": item.product.name,
                        "issue": issue,
                    }
                )

        return {"is_valid": not issues, "issues": issues}

    #commands
    def add_to_cart(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        # Walidacje
        if quantity <= 0:
            raise BadRequestError("Quantity must be at least 1")

        if quantity > MAX_CART_QUANTITY:
            raise BadRequestError(f"Maximum quantity per item is {MAX_CART_QUANTITY}")

        product = self.product_repo.get_product(product_id)

        if not product:
            raise NotFoundError("Product not found")

        if not product.is_active:
            raise BadRequestError("This product is no longer available")

        if not product.vendor.is_approved:
            raise BadRequestError("This product is from an unapproved vendor")

        # Sprawdz czy produkt juz jest w koszyku
        existing_item = self.repo.get_user_item(user_id, product_id)
        new_quantity = existing_item.quantity + quantity if existing_item else quantity

        if new_quantity > product.stock:
            if existing_item:
                detail = f"You already have {existing_item.quantity} in your cart."
            else:
                detail = "You requested too many."
            raise BadRequestError(f"Only {product.stock} items available in stock. {detail}")

        if new_quantity > MAX_CART_QUANTITY:
            raise BadRequestError(f"Maximum quantity per item is {MAX_CART_QUANTITY}")

        try:
            if existing_item:
                logger.info(
                    f"Produkt {product_id} już jest w koszyku, zwiekszam ilosc "
                    f"z {existing_item.quantity} do {new_quantity}"
                )
                existing_item.quantity = new_quantity
                item = self.repo.add_cart_item(existing_item)
            else:
                logger.info(f"Dodaje nowy produkt {product_id} do koszyka usera {user_id}")
                item = self.repo.add_cart_item(
                    CartItemModel(
                        user_id=user_id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            if existing_item:
                raise
            #rownolegle dodanie tego samego produktu, pozycja juz istnieje -> scalamy ilosc
            logger.warning(f"Produkt {product_id} dodany rownolegle do koszyka usera {user_id}, ponawiam")
            return self.add_to_cart(user_id, product_id, quantity)
        except Exception as e:
            logger.error(f"Blad podczas dodawania produktu: {e}")
            self.repo.rollback()
            raise

        return {
            "success": True,
            "message": "Cart updated successfully" if existing_item else "Product added to cart",
            "cart_item_id": item.id,
            "quantity": new_quantity,
        }

    def update_quantity(self, user_id: int, cart_item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise BadRequestError("Quantity must be at least 1")

        if quantity > MAX_CART_QUANTITY:
            raise BadRequestError(f"Maximum quantity per item is {MAX_CART_QUANTITY}")

        item = self._owned_item(user_id, cart_item_id)

        if quantity > item.product.stock:
            raise BadRequestError(f"Only {item.product.stock} items available in stock")

        item.quantity = quantity
        self.repo.add_cart_item(item)
        self.repo.commit()

        logger.info(f"Pozycja {cart_item_id} usera {user_id}: nowa ilosc {quantity}")

        return {
            "success": True,
            "message": "Cart updated successfully",
            "cart_item_id": cart_item_id,
            "quantity": quantity,
        }

    def remove_item(self, user_id: int, cart_item_id: int) -> Dict[str, Any]:
        item = self._owned_item(user_id, cart_item_id)

        self.repo.delete_cart_item(item)
        self.repo.commit()

        logger.info(f"Usunieto pozycje {cart_item_id} z koszyka usera {user_id}")

        return {"success": True, "message": "Item removed from cart"}

    def clear_cart(self, user_id: int) -> Dict[str, Any]:
        removed = self.repo.clear_cart(user_id)
        self.repo.commit()

        logger.info(f"Wyczyszczono koszyk usera {user_id} ({removed} pozycji)")

        return {
            "success": True,
            "message": f"Removed {removed} items from cart",
            "items_removed": removed,
        }

    def _owned_item(self, user_id: int, cart_item_id: int) -> CartItemModel:
        item = self.repo.get_cart_item(cart_item_id)

        if not item:
            raise NotFoundError("Cart item not found")

        if item.user_id != user_id:
            raise ForbiddenError("This cart item doesn't belong to you")

        return item
