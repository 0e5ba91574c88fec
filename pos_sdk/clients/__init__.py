# pos_sdk/clients/__init__.py
