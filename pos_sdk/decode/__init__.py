# pos_sdk/decode/__init__.py
