"""
Domain services.

Services hold business rules and mutate the live enterprise state they are
constructed with; repositories open the store transaction and build them.
"""
