from .feed_ranking import FeedItem, FeedRankingPolicy, NewestFirstPolicy

__all__ = ["FeedItem", "FeedRankingPolicy", "NewestFirstPolicy"]
