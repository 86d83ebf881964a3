from medstock.core.ledger import Medicine


def stock_status(current_stock, low_stock_threshold):
    if current_stock <= 0:
        return "OUT_OF_STOCK"
    if current_stock <= low_stock_threshold:
        return "LOW_SUPPLY"
    return "IN_STOCK"


def matches_status_filter(medicine: Medicine, status_filter):
    if status_filter == "low":
        return 0 < medicine.current_stock <= medicine.low_stock_threshold
    if status_filter == "out":
        return medicine.current_stock == 0
    return True


def low_stock_medicines(medicines):
    flagged = [med for med in medicines if med.current_stock <= med.low_stock_threshold]
    return sorted(flagged, key=lambda med: med.current_stock)
