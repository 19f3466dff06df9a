# capacity_model/schema/columns.py

# Per-draw simulation table
AVAILABILITY_FRACTION = "availability_fraction"
PRODUCTIVITY_RATE = "productivity_rate"
AVAILABLE_STAFF = "available_staff"
ANNUAL_HIRES = "annual_hires"

# Saturation adjustment
SATURATION_ADJUSTMENT = "saturation_adjustment"
ADJUSTED_HIRES = "adjusted_hires"

# Scenario sweep table
WORKFORCE_SIZE_FACTOR = "workforce_size_factor"
WORKFORCE_SIZE = "workforce_size"
AVAILABLE_STAFF_TOTAL = "available_staff_total"
ADJUSTED_ANNUAL_HIRES = "adjusted_annual_hires"
STAFF_AVAILABILITY_RATIO = "staff_availability_ratio"

# Regression design terms
INTERCEPT = "intercept"
WORKFORCE_SIZE_CENTERED = "workforce_size_centered"
STAFF_AVAILABILITY_RATIO_CENTERED = "staff_availability_ratio_centered"

BASELINE_COLUMNS = [
    AVAILABILITY_FRACTION,
    PRODUCTIVITY_RATE,
    AVAILABLE_STAFF,
    ANNUAL_HIRES,
]

SATURATION_COLUMNS = [
    AVAILABILITY_FRACTION,
    PRODUCTIVITY_RATE,
    SATURATION_ADJUSTMENT,
    ADJUSTED_HIRES,
]

SCENARIO_COLUMNS = [
    WORKFORCE_SIZE_FACTOR,
    WORKFORCE_SIZE,
    SATURATION_ADJUSTMENT,
    PRODUCTIVITY_RATE,
    AVAILABLE_STAFF_TOTAL,
    ADJUSTED_ANNUAL_HIRES,
    STAFF_AVAILABILITY_RATIO,
]

REGRESSION_TERMS = [
    INTERCEPT,
    WORKFORCE_SIZE_CENTERED,
    STAFF_AVAILABILITY_RATIO_CENTERED,
]
