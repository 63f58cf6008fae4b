# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    Wolany dopiero po commicie transakcji.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        """
        Powiadomienie o zlozeniu zamowienia.
        """
        try:
            send_order_notification_task.delay(user_id, order_id)
        except Exception as e:
            #zamowienie juz jest zapisane, brak brokera nie moze go cofnac
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")

    @staticmethod
    def send_status_notification(user_id: int, order_id: int, status: str):
        """
        Powiadomienie o zmianie statusu (w tym anulowaniu).
        """
        try:
            send_order_status_task.delay(user_id, order_id, status)
        except Exception as e:
            logger.warning(f"Failed to enqueue status notification for order {order_id}: {e}")


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task - w prawdziwym systemie wyslalby email/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="app.services.notification_service.send_order_status_task")
def send_order_status_task(user_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")
    return {"user_id": user_id, "order_id": order_id, "order_status": status, "status": "sent"}
