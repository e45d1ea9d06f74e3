"""
CRM source transformations (Bronze -> Silver).

Modules:
- customer: Customer master (crm_cust_info)
- product: Product versions (crm_prd_info)
- sales: Sales order lines (crm_sales_details)
"""
from warehouse.transformations.crm.customer import transform_crm_customer
from warehouse.transformations.crm.product import transform_crm_product
from warehouse.transformations.crm.sales import transform_crm_sales

__all__ = [
    'transform_crm_customer',
    'transform_crm_product',
    'transform_crm_sales',
]
