import time
import boto3
from typing import Any, Dict, Iterable, Optional, List
from decimal import Decimal
from ..ports.fill_provider import FillProvider
from ..domain.models import Fill
from ..domain.time_window import TimeWindow
from ..errors import RedshiftQueryError

_SQL = """
SELECT wallet,
       coin,
       CASE WHEN side IN ('B','buy') THEN 'buy' ELSE 'sell' END as side,
       px,
       sz,
       EXTRACT(EPOCH FROM ts)*1000::bigint as ts_ms,
       notional_usd,
       leverage,
       closed_pnl,
       hash,
       base_tid
FROM {schema}.{table}
WHERE wallet = :wallet
  AND coin NOT LIKE '@%%'
  AND ts >= (TIMESTAMP 'epoch' + (:start_ms/1000.0) * INTERVAL '1 second')
  AND ts <= (TIMESTAMP 'epoch' + (:end_ms/1000.0)   * INTERVAL '1 second')
  {coin_filter}
ORDER BY ts
"""

_PENDING = ("SUBMITTED", "PICKED", "STARTED")

def _cell(field: Dict[str, Any]) -> Any:
    # Data API cell: {"stringValue": "..."} / {"longValue": 1} / {"isNull": True}
    if not field or field.get("isNull"):
        return None
    return list(field.values())[0]

def _dec(v: Any) -> Optional[Decimal]:
    return Decimal(str(v)) if v is not None else None

class RedshiftDataApiProvider(FillProvider):
    def __init__(self, workgroup_or_cluster: str, database: str, secret_arn: str,
                 schema: str, table: str, client=None, poll_sec: float = 0.5):
        self._client = client or boto3.client("redshift-data")
        self._wg_or_cluster = workgroup_or_cluster
        self._db = database
        self._secret = secret_arn
        self._schema = schema
        self._table = table
        self._poll_sec = poll_sec

    def _run(self, sql: str, params: List[Dict[str, Any]]) -> List[List[Dict[str, Any]]]:
        exec_args = dict(
            Database=self._db,
            SecretArn=self._secret,
            Sql=sql,
            Parameters=params
        )
        # Serverless vs Cluster: "cluster:<id>" means ClusterIdentifier, anything else is a workgroup
        if self._wg_or_cluster and not self._wg_or_cluster.lower().startswith("cluster:"):
            exec_args["WorkgroupName"] = self._wg_or_cluster
        else:
            exec_args["ClusterIdentifier"] = self._wg_or_cluster.replace("cluster:", "")

        sid = self._client.execute_statement(**exec_args)["Id"]
        desc = self._client.describe_statement(Id=sid)
        while desc["Status"] in _PENDING:
            time.sleep(self._poll_sec)
            desc = self._client.describe_statement(Id=sid)
        if desc["Status"] != "FINISHED":
            raise RedshiftQueryError(f"Redshift Data API failed: {desc.get('Error') or desc['Status']}")

        records: List[List[Dict[str, Any]]] = []
        kwargs: Dict[str, Any] = {"Id": sid}
        while True:
            res = self._client.get_statement_result(**kwargs)
            records.extend(res["Records"])
            token = res.get("NextToken")
            if not token:
                return records
            kwargs["NextToken"] = token

    def fetch_fills(self, wallet: str, window: TimeWindow, coin: Optional[str]=None) -> Iterable[Fill]:
        coin_filter = "AND coin = :coin" if coin else ""
        sql = _SQL.format(schema=self._schema, table=self._table, coin_filter=coin_filter)
        params = [
            {"name":"wallet","value":{"stringValue":wallet}},
            {"name":"start_ms","value":{"longValue":window.start_ms}},
            {"name":"end_ms","value":{"longValue":window.end_ms}},
        ]
        if coin:
            params.append({"name":"coin","value":{"stringValue":coin}})

        out: List[Fill] = []
        for r in self._run(sql, params):
            # column order follows the SELECT
            base_tid = _cell(r[10])
            out.append(Fill(
                wallet=_cell(r[0]),
                market=_cell(r[1]),
                side=_cell(r[2]),
                px=Decimal(str(_cell(r[3]))),
                sz=Decimal(str(_cell(r[4]))),
                ts_ms=int(_cell(r[5])),
                notional_usd=_dec(_cell(r[6])),
                leverage=_dec(_cell(r[7])),
                closed_pnl=_dec(_cell(r[8])),
                hash=_cell(r[9]),
                tid=int(base_tid) if base_tid is not None else None,
            ))
        return out
