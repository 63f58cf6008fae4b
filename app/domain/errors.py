# app/domain/errors.py
"""
Wyjatki domenowe rzucane przez serwisy.
Routery tlumacza je na HTTPException (404 / 403 / 400).
"""


class MarketHubError(Exception):
    """Bazowa klasa bledow domeny"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MarketHubError):
    """Zamowienie / produkt / pozycja koszyka nie istnieje"""


class ForbiddenError(MarketHubError):
    """Zly wlasciciel albo brak profilu sprzedawcy"""


class BadRequestError(MarketHubError):
    """Walidacja: brak stanu, nieaktywny produkt, niedozwolona zmiana statusu, pusty koszyk"""
