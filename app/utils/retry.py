# app/utils/retry.py
from sqlalchemy.exc import OperationalError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.utils.settings import CHECKOUT_RETRY_ATTEMPTS


def db_retry(attempts: int = CHECKOUT_RETRY_ATTEMPTS):
    #deadlock / serialization failure w postgresie konczy sie OperationalError,
    #cala transakcja jest powtarzana od poczatku
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OperationalError),
    )
