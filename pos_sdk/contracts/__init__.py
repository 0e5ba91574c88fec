# pos_sdk/contracts/__init__.py
