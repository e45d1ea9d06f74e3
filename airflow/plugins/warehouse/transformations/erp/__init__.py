"""
ERP source transformations (Bronze -> Silver).

Modules:
- customer: Customer demographics (erp_cust_az12)
- location: Customer country (erp_loc_a101)
- category: Product category map (erp_px_cat_g1v2)
"""
from warehouse.transformations.erp.customer import transform_erp_customer
from warehouse.transformations.erp.location import transform_erp_location
from warehouse.transformations.erp.category import transform_erp_category

__all__ = [
    'transform_erp_customer',
    'transform_erp_location',
    'transform_erp_category',
]
