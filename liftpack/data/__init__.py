"""Signal sources."""

from liftpack.data.yahoo import PriceField, YahooSeries, load_series

__all__ = ["PriceField", "YahooSeries", "load_series"]
