# app/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.models.user import UserModel


def get_current_user_id(
    x_user_id: int | None = Header(default=None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> int:
    #tozsamosc ustawia zewnetrzny provider auth (gateway), tu tylko sprawdzamy czy user istnieje
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    if not db.get(UserModel, x_user_id):
        raise HTTPException(status_code=401, detail="Unknown user")

    return x_user_id
