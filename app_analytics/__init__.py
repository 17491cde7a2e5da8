"""
App Analytics Engine

Calculates store analytics from cleaned app and review records:
- Summary statistics (mean, median, mode, quartiles, dispersion)
- Pearson correlation and linear trends
- Category performance and market share
- Rating distribution, frequency ranking and outliers
- Review sentiment breakdown
"""

__version__ = "0.1.0"
