"""
Customer onboarding questionnaires.
"""
