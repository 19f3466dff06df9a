# capacity_model/dynamics/__init__.py
