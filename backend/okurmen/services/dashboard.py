from __future__ import annotations

from ..schemas import DashboardStats
from ..stores import CredentialStore, QuestionBank, ResultStore
from .projection import list_all


RECENT_RESULTS = 10


def dashboard_stats(credentials: CredentialStore, bank: QuestionBank, results: ResultStore) -> DashboardStats:
	# Zero-percent attempts are left out of the average
	avg = results.average_positive_percentage()
	return DashboardStats(
		total_users=credentials.count_users(),
		total_questions=bank.count_active(),
		total_tests=results.count(),
		avg_score=int(avg + 0.5),
		level_distribution=results.tier_distribution(),
		recent_results=list_all(results, bank, credentials, limit=RECENT_RESULTS),
	)
