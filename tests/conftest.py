import os

# src.main reads settings at import time
os.environ.setdefault("ROW_STORE_BACKEND", "memory")
