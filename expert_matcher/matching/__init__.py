"""
Matching engine: scores candidates against a request and ranks them, and
builds personalized recommendation views over a candidate pool.

Modules
-------
tables      : MatchingTables + ExperiencePolicy — immutable lookup tables.
scorers     : ComponentScore + the six score_* functions — pure, no I/O.
aggregator  : MatchWeights + MatchAggregator — weighted MatchScore.
ranker      : rank_candidates() / rank_candidates_with_profiles().
segmenter   : trending / fast_responders / budget_friendly / top_rated views.
preferences : derive_preferences() from an organization's past requests.
prefilter   : prefilter_pool() — repository-side pool narrowing.
"""
