# bakery_pos/core/errors.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class LedgerError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Bad cart mutation input. The cart is left untouched."""

    status_code = 422


class IncompleteSaleError(LedgerError):
    """Commit attempted without a bakery, without lines, or twice."""

    status_code = 422


class PersistenceError(LedgerError):
    status_code = status.HTTP_502_BAD_GATEWAY


class EmptyExportError(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND


class NotFoundError(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND


async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, ledger_error_handler)
