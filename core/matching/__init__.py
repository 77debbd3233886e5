from core.matching.service import MatchQueryService
from core.matching.notifier import MatchNotifier

__all__ = ['MatchQueryService', 'MatchNotifier']
