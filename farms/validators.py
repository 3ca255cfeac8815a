from decimal import Decimal

from core.exceptions import FieldIssue


def validate_land_use(total_area, arable_area, vegetation_area):
    """
    Arable plus vegetation area must fit inside the farm's total area.

    Missing values count as zero. Returns a list of FieldIssue.
    """
    total = Decimal(total_area or 0)
    used = Decimal(arable_area or 0) + Decimal(vegetation_area or 0)

    if used > total:
        return [FieldIssue(
            'arable_area', 'land_use',
            f"Arable area plus vegetation area ({used} ha) cannot exceed the total area ({total} ha)."
        )]
    return []


def validate_total_covers_planting(total_area, planted_area):
    """
    A farm's total area cannot shrink below the area already planted on it.

    Returns a list of FieldIssue.
    """
    total = Decimal(total_area or 0)
    planted = Decimal(planted_area or 0)

    if planted > total:
        return [FieldIssue(
            'total_area', 'farm_capacity',
            f"Total area ({total} ha) cannot be smaller than the area already planted ({planted} ha)."
        )]
    return []
