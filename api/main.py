"""
FastAPI Backend for the SMS Expense Tracker
RESTful API endpoints for parsing bank SMS messages
"""

import re
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sms_tracker.config import config
from sms_tracker.logging_config import get_logger, setup_logging
from sms_tracker.main import SMSMessageParser, TransactionSummarizer
from sms_tracker.validators import (
    DuplicateMessage,
    EmptyInput,
    ExtractionError,
    IncompleteExtraction,
)

# Setup logging
setup_logging()
logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    EmptyInput: 400,
    DuplicateMessage: 409,
    IncompleteExtraction: 422,
}

MONTH_PATTERN = re.compile(r"\d{4}-\d{2}")

# Initialize FastAPI app
app = FastAPI(
    title="SMS Expense Tracker API",
    description="Extract structured transactions from bank SMS notifications",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One parsing session per application instance
app.state.parser = SMSMessageParser()


class ParseRequest(BaseModel):
    message: str


class BatchParseRequest(BaseModel):
    messages: List[str]


def _status_code_for(error: ExtractionError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 400


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": config.APP_NAME,
        "version": config.VERSION,
        "extraction_mode": app.state.parser.mode,
        "endpoints": {
            "POST /parse": "Parse one SMS message",
            "POST /parse/batch": "Parse several SMS messages",
            "GET /transactions": "Transactions parsed in this session",
            "GET /summary": "Debit/credit totals, optionally for one month",
            "DELETE /session": "Clear parsed messages and transactions",
            "GET /health": "Health check"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/parse")
def parse_sms(request: ParseRequest):
    """
    Parse one bank SMS message into a transaction record.

    - **message**: SMS text as received
    """
    try:
        record = app.state.parser.parse_message(request.message)
    except ExtractionError as e:
        logger.warning(f"Parse rejected: {e}")
        raise HTTPException(status_code=_status_code_for(e), detail=str(e))

    return {
        "status": "success",
        "transaction": record.to_dict()
    }


@app.post("/parse/batch")
def parse_sms_batch(request: BatchParseRequest):
    """
    Parse several SMS messages. Failures are reported per message.

    - **messages**: List of SMS texts
    """
    if not request.messages:
        raise HTTPException(status_code=400, detail="At least one message is required")

    records, errors = app.state.parser.parse_messages(request.messages)
    logger.info(f"Batch: {len(records)} parsed, {len(errors)} rejected")

    return {
        "status": "success" if not errors else "partial",
        "transactions": [record.to_dict() for record in records],
        "errors": [
            {
                "message": message,
                "error": type(error).__name__,
                "detail": str(error)
            }
            for message, error in errors
        ]
    }


@app.get("/transactions")
def list_transactions():
    """List transactions parsed in this session"""
    records = app.state.parser.get_records()
    return {
        "total_transactions": len(records),
        "transactions": [record.to_dict() for record in records]
    }


@app.get("/summary")
def transaction_summary(month: Optional[str] = Query(None, description="Month (YYYY-MM)")):
    """
    Summarize debits and credits for the session.

    - **month**: Optional month filter in YYYY-MM format
    """
    if month:
        # strptime alone accepts one-digit months, which never match a stored date
        if not MONTH_PATTERN.fullmatch(month):
            raise HTTPException(status_code=400, detail="Invalid month format. Use YYYY-MM")
        try:
            datetime.strptime(month, "%Y-%m")
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid month format. Use YYYY-MM")

    records = app.state.parser.get_records()
    summary = TransactionSummarizer.summarize(records, month)
    summary["by_category"] = TransactionSummarizer.group_by_category(
        TransactionSummarizer.filter_by_month(records, month)
    )
    return summary


@app.delete("/session")
def reset_session():
    """Clear the session's seen messages and transactions"""
    app.state.parser.reset()
    return {
        "status": "success",
        "message": "Session cleared"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
