"""
Lead log: one flat row per estimate submission.

Columns match the lead spreadsheet the sales team works from. Delivery to
the sheet itself is handled outside this app; here the row is only built
and written to the "filmquote.leads" logger.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .schemas import LeadSubmission, ProjectEstimate

logger = logging.getLogger("filmquote.leads")

SHEET_COLUMNS = [
    "Timestamp",
    "Name",
    "Email",
    "Phone",
    "Zip",
    "Notes",
    "SMS Consent",
    "Project Type",
    "Estimate Low",
    "Estimate High",
    "Window Count",
]


def build_sheet_row(submission: LeadSubmission, estimate: ProjectEstimate,
                    timestamp: Optional[datetime] = None) -> list:
    """
    Flatten a submission into SHEET_COLUMNS order.

    The low/high cells stay blank when the range is not shown to the
    customer (special equipment jobs), so nobody quotes it by mistake.
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    lead = submission.lead
    show_range = estimate.can_show_price_range

    return [
        timestamp.isoformat(),
        lead.name,
        lead.email,
        lead.phone,
        lead.zip_code,
        lead.notes,
        "Yes" if lead.sms_consent else "No",
        submission.project_type,
        estimate.low if show_range else "",
        estimate.high if show_range else "",
        len(submission.windows),
    ]


def log_lead(submission: LeadSubmission, estimate: ProjectEstimate) -> dict:
    """Write the submission to the lead log. Returns the row keyed by column."""
    row = dict(zip(SHEET_COLUMNS, build_sheet_row(submission, estimate)))
    logger.info(
        "Lead submission: %s <%s>, %s, %d windows, range %s-%s",
        row["Name"] or "(no name)", row["Email"] or "no email",
        row["Project Type"], row["Window Count"],
        row["Estimate Low"] or "n/a", row["Estimate High"] or "n/a",
    )
    logger.debug("Lead row: %s", row)
    return row
