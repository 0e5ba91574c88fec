# pos_sdk/calls/__init__.py
