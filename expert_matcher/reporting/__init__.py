"""
Reporting: terminal formatting and file export of engine output.

Modules
-------
formatters : format_match_table() + format_recommendations() +
             format_budget_range() — plain strings, no I/O.
export     : build_match_payload() + write_matches_json() +
             write_matches_csv() — file output.
"""
