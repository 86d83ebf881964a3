from datetime import datetime

from medstock.core.consumption import calculate_consumption_data
from medstock.core.constants import SORT_OPTIONS, STATUS_FILTERS
from medstock.core.dates import resolve_now
from medstock.core.stock_status import matches_status_filter, stock_status


def _normalize_choice(value, choices, default, field):
    if value is None:
        return default
    key = str(value).strip().lower()
    if not key:
        return default
    if key not in choices:
        raise ValueError(
            "{} must be one of: {}".format(field, ", ".join(choices))
        )
    return key


def _name_key(item):
    return item["medicine"].name.casefold()


def _depletion_key(item):
    depletion_date = item["consumption"].depletion_date
    if depletion_date is None:
        return (1, 0.0, _name_key(item))
    return (0, depletion_date.timestamp(), _name_key(item))


def medicine_overview(
    medicines,
    status_filter=None,
    search=None,
    sort=None,
    now: datetime | None = None,
):
    status_filter = _normalize_choice(status_filter, STATUS_FILTERS, "all", "status")
    sort = _normalize_choice(sort, SORT_OPTIONS, "name-asc", "sort")
    query_text = str(search).strip().casefold() if search else ""
    now = resolve_now(now)

    results = []
    for medicine in medicines:
        if not matches_status_filter(medicine, status_filter):
            continue
        if query_text and query_text not in medicine.name.casefold():
            continue
        results.append(
            {
                "medicine": medicine,
                "status": stock_status(medicine.current_stock, medicine.low_stock_threshold),
                "consumption": calculate_consumption_data(medicine, now=now),
            }
        )

    if sort == "stock-desc":
        results.sort(key=lambda item: -item["medicine"].current_stock)
    elif sort == "stock-asc":
        results.sort(key=lambda item: item["medicine"].current_stock)
    elif sort == "depletion-asc":
        results.sort(key=_depletion_key)
    else:
        results.sort(key=_name_key)
    return results
