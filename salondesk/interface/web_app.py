"""Mini README: FastAPI service for the salon cash desk.

Structure:
    * create_application - application factory wiring the register routes.

Routes return JSON built from the register's own records and recomputed
summaries; the interface never totals amounts itself. Failed register
operations become HTTP errors: 404 for unknown ids, 503 when the snapshot
could not be saved and 400 for anything the cashier entered incorrectly.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse, Response

from ..configuration import get_settings
from ..export import DayReport
from ..logging_utils import get_logger
from ..register import CashRegister, DailySummary, OperationResult, TransactionDraft

LOGGER = get_logger(__name__)


def _raise_for_failure(result: OperationResult) -> None:
    """Translate a failed register operation into an HTTP error."""

    if result.success:
        return
    if result.not_found:
        status_code = 404
    elif result.storage_failure:
        status_code = 503
    else:
        status_code = 400
    raise HTTPException(status_code=status_code, detail=result.error)


def create_application(register: Optional[CashRegister] = None) -> FastAPI:
    """Create the FastAPI application bound to ``register``.

    When no register is supplied one is built from the cached settings, which
    loads the JSON snapshot from the configured data directory.
    """

    app = FastAPI(title="SalonDesk Cash Control", version="0.1.0")
    settings = get_settings()
    register = register if register is not None else CashRegister.from_settings(settings)

    dashboard_state: Dict[str, List[str]] = {
        "messages": [
            "Set today's opening float before taking the first payment.",
            "Card payments include the surcharge automatically.",
            "Change is calculated automatically for cash payments.",
        ]
    }

    def _summary_for(day: Optional[str]) -> DailySummary:
        try:
            return register.summary(day)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error

    @app.get("/")
    async def dashboard() -> JSONResponse:
        """Return today's summary with the records behind it."""

        summary = register.summary()
        transactions = register.transactions_for_day(summary.date)
        LOGGER.debug("Rendering dashboard for %s with %s transactions", summary.date, len(transactions))
        messages = list(dashboard_state["messages"])
        if register.load_error:
            messages.insert(0, register.load_error)
        return JSONResponse(
            {
                "summary": summary.as_dict(),
                "transactions": [transaction.as_dict() for transaction in transactions],
                "expenses": [expense.as_dict() for expense in register.expenses_for_day(summary.date)],
                "employees": [employee.as_dict() for employee in register.list_employees()],
                "messages": messages,
                "currency_symbol": settings.currency_symbol,
            }
        )

    @app.get("/summary")
    async def day_summary(day: Optional[str] = None) -> JSONResponse:
        """Return the summary for ``day`` (``DD/MM/YYYY``), today by default."""

        return JSONResponse(_summary_for(day).as_dict())

    @app.post("/transactions")
    async def add_transaction(
        client: str = Form(...),
        payment_method: str = Form(...),
        service_amount: str = Form(...),
        served_by: str = Form(...),
        amount_received: Optional[str] = Form(None),
        notes: str = Form(""),
    ) -> JSONResponse:
        """Record a payment and return it with the refreshed summary."""

        result = register.add_transaction(
            TransactionDraft(
                client=client,
                payment_method=payment_method,
                service_amount=service_amount,
                served_by=served_by,
                amount_received=amount_received,
                notes=notes,
            )
        )
        _raise_for_failure(result)
        transaction = result.payload
        return JSONResponse(
            {
                "transaction": transaction.as_dict(),
                "summary": register.summary().as_dict(),
            },
            status_code=201,
        )

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Delete a payment and return the recomputed summary of its day."""

        result = register.delete_transaction(transaction_id)
        _raise_for_failure(result)
        return JSONResponse({"deleted": transaction_id, "summary": result.payload.as_dict()})

    @app.post("/expenses")
    async def add_expense(
        amount: str = Form(...),
        description: str = Form(""),
    ) -> JSONResponse:
        result = register.add_expense(amount, description)
        _raise_for_failure(result)
        return JSONResponse(
            {"expense": result.payload.as_dict(), "summary": register.summary().as_dict()},
            status_code=201,
        )

    @app.delete("/expenses/{expense_id}")
    async def delete_expense(expense_id: str) -> JSONResponse:
        result = register.delete_expense(expense_id)
        _raise_for_failure(result)
        return JSONResponse({"deleted": expense_id, "summary": result.payload.as_dict()})

    @app.post("/opening-float")
    async def update_opening_float(
        amount: str = Form(...),
        day: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Change a day's opening float; totals are recomputed immediately."""

        result = register.update_opening_float(amount, day)
        _raise_for_failure(result)
        return JSONResponse(result.payload.as_dict())

    @app.get("/employees")
    async def list_employees() -> JSONResponse:
        return JSONResponse({"employees": [employee.as_dict() for employee in register.list_employees()]})

    @app.post("/employees")
    async def add_employee(name: str = Form(...)) -> JSONResponse:
        result = register.add_employee(name)
        _raise_for_failure(result)
        return JSONResponse(result.payload.as_dict(), status_code=201)

    @app.delete("/employees/{employee_id}")
    async def delete_employee(employee_id: str) -> JSONResponse:
        _raise_for_failure(register.delete_employee(employee_id))
        return JSONResponse({"deleted": employee_id})

    @app.get("/export")
    async def export_day(day: Optional[str] = None) -> Response:
        """Download the day's report as CSV."""

        _summary_for(day)
        report = DayReport.build(register, day, currency_symbol=settings.currency_symbol)
        LOGGER.info("Exporting CSV report for %s", report.summary.date)
        return Response(
            content=report.to_csv(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
        )

    return app
