"""
Eligibility engine for regulatory transaction reporting.
"""
