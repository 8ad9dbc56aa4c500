"""DataService — SOQL queries and single-record CRUD."""

from __future__ import annotations

from sfmcp.services.base import BaseService
from sfmcp.services.result import ServiceResult
from sfmcp.services.telemetry import traced


def soql_quote(value: str) -> str:
    """Return *value* as a single-quoted SOQL string literal.

    Backslashes and single quotes are escaped with a backslash.
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def build_soql(
    sobject: str,
    fields: str,
    *,
    where: str | None = None,
    order_by: str | None = None,
    limit: int | None = None,
) -> str:
    """Assemble a SELECT statement from its clauses.

    Examples:
        >>> build_soql("Account", "Id, Name", where="Name = 'Acme'", limit=5)
        "SELECT Id, Name FROM Account WHERE Name = 'Acme' LIMIT 5"
    """
    query = f"SELECT {fields} FROM {sobject}"
    if where:
        query += f" WHERE {where}"
    if order_by:
        query += f" ORDER BY {order_by}"
    if limit:
        query += f" LIMIT {limit}"
    return query


class DataService(BaseService):
    """Record-level operations against a target org."""

    @traced
    def query(
        self,
        target_org: str,
        sobject: str,
        fields: str,
        *,
        where: str | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """Run a SOQL query and return only the records."""
        op = "data_query"
        soql = build_soql(sobject, fields, where=where, order_by=order_by, limit=limit)
        result = self._run_sf(op, "data", "query", "--target-org", target_org, "--query", soql)
        if not result.ok:
            return result
        body = result.data.get("result") or {}
        records = body.get("records", []) if isinstance(body, dict) else []
        return ServiceResult(
            ok=True,
            op=op,
            data={"query": soql, "total_size": len(records), "records": records},
        )

    @traced
    def create_record(self, target_org: str, sobject: str, values: str) -> ServiceResult:
        """Create one record; *values* is ``"Field='value' Other='value'"``."""
        return self._run_sf(
            "data_create",
            "data",
            "create",
            "record",
            "--sobject",
            sobject,
            "--values",
            values,
            "--target-org",
            target_org,
        )

    @traced
    def update_record(
        self, target_org: str, sobject: str, record_id: str, values: str
    ) -> ServiceResult:
        return self._run_sf(
            "data_update",
            "data",
            "update",
            "record",
            "--sobject",
            sobject,
            "--record-id",
            record_id,
            "--values",
            values,
            "--target-org",
            target_org,
        )

    @traced
    def delete_record(self, target_org: str, sobject: str, record_id: str) -> ServiceResult:
        return self._run_sf(
            "data_delete",
            "data",
            "delete",
            "record",
            "--sobject",
            sobject,
            "--record-id",
            record_id,
            "--target-org",
            target_org,
        )
