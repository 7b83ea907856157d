"""Pure logic over fetched observation data.

  - activity.py  Fold ObservationRecords into ActivitySummary (per hotspot or grouped)
  - ranking.py   Order and select RankedResults for the top/notable/random modes

Nothing here performs I/O; the orchestration lives in ``flows/``.
"""
