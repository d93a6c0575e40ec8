"""Investment return calculations for rental, flip and BRRRR deals."""

from dealcalc.analysis.amortization import monthly_payment, amortization_schedule, round_currency
from dealcalc.analysis.engine import DealCalculator
from dealcalc.analysis.brrrr import BRRRRAnalyzer, calculate_brrrr
from dealcalc.analysis.rental import RentalAnalyzer, calculate_rental
from dealcalc.analysis.flip import FlipAnalyzer, calculate_flip
