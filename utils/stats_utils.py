# utils/stats_utils.py
import numpy as np
from scipy.stats import chi2, norm

# -----------------------------------------
# Chi-square tail probabilities
# -----------------------------------------

def chisq_pvalue(chisq):
    """
    Upper-tail p-value of a 1-df chi-square statistic.
    """
    return float(chi2.sf(chisq, df=1))


# -----------------------------------------
# Group-sequential boundaries
# -----------------------------------------

def obf_boundary(chisq, info_denominator, z=1.6448, info_total=70):
    """
    O'Brien-Fleming style significance level for a stage statistic.

    boundary = 1 - Phi((z * sqrt(info_total) - chisq) / sqrt(info_denominator))
    The level relaxes as the statistic grows.
    """
    return float(1 - norm.cdf((z * np.sqrt(info_total) - chisq) / np.sqrt(info_denominator)))


def union_bound(p_a, p_b):
    """
    Probability that at least one of two independent tests rejects:
    p_a + p_b - p_a * p_b. Used for the intersection hypothesis of the closed test.
    """
    return p_a + p_b - p_a * p_b
