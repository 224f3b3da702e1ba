"""CRUD operations for accounts using FastCRUD."""

from fastcrud import FastCRUD

from .models import Account

account_crud: FastCRUD = FastCRUD(Account)
