"""
Deals API routes - import and read deals files.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from deal_insights.deals.store import DealStore
from deal_insights.api.dependencies import get_deal_store

router = APIRouter(prefix="/deals", tags=["deals"])


@router.post("/import")
async def import_deals(
    files: List[UploadFile] = File(...),
    store: DealStore = Depends(get_deal_store),
):
    """
    Import deals Parquet files.

    Each file is validated against the deals schema before it is copied into
    the deals directory. Per-file outcomes are reported; invalid files do not
    stop valid ones from being imported.
    """
    payload = [(f.filename or "", await f.read()) for f in files]
    result = await run_in_threadpool(store.validate_and_store_files, payload)
    return result.to_dict()


@router.get("")
async def read_deals(
    account_number: Optional[str] = Query(
        default=None,
        description="Account file to read (without .parquet). All files when omitted.",
    ),
    store: DealStore = Depends(get_deal_store),
):
    """Read deals from one account file, or from every file."""
    if account_number is not None:
        deals = await run_in_threadpool(store.read_deals_from_file, account_number)
    else:
        deals = await run_in_threadpool(store.read_all_deals)
    return [d.to_dict() for d in deals]
