"""
Domain layer: records and the services that fetch them.
"""
