"""
account_service tests

Covers the backend logic of the account service:

- Password hashing and bearer token issuance (`auth.py`)
- Registration, login and profile updates (`service.py`, `repository.py`)
- FastAPI routes, bearer dependency and error mapping (`main.py`, `routes/`)
- Database schema (`models.py`, `db.py`)
"""
