"""
CRM sales transformations.

Source tables:
- bronze.crm_sales_details -> silver.crm_sales_details
"""
import pandas as pd

from warehouse.transformations._helpers import (
    parse_packed_date,
    reconcile_price,
    reconcile_sales_amount,
    to_integer,
)

__all__ = ['transform_crm_sales']

DATE_COLUMNS = ('sls_order_dt', 'sls_ship_dt', 'sls_due_dt')


def transform_crm_sales(df: pd.DataFrame) -> pd.DataFrame:
    """
    Transform crm_sales_details -> silver crm_sales_details.

    Key: sls_ord_num, sls_prd_key, sls_cust_id (not unique)

    Dates arrive as YYYYMMDD integers; zero, wrong-length and invalid
    values become null. Sales amount and price are repaired from the same
    stored snapshot, so neither rule sees the other's output.

    Columns:
        sls_ord_num: Order number
        sls_prd_key: Product key (joins crm_prd_info.prd_key)
        sls_cust_id: Customer id (joins crm_cust_info.cst_id)
        sls_order_dt / sls_ship_dt / sls_due_dt: Order, ship and due dates
        sls_sales: Sales amount (quantity * price)
        sls_quantity: Quantity as landed
        sls_price: Unit price
    """
    sales = pd.to_numeric(df['sls_sales'], errors='coerce')
    quantity = pd.to_numeric(df['sls_quantity'], errors='coerce')
    price = pd.to_numeric(df['sls_price'], errors='coerce')

    result = pd.DataFrame({
        'sls_ord_num': df['sls_ord_num'],
        'sls_prd_key': df['sls_prd_key'],
        'sls_cust_id': to_integer(df['sls_cust_id']),
    })
    for column in DATE_COLUMNS:
        result[column] = df[column].map(parse_packed_date)

    result['sls_sales'] = to_integer(reconcile_sales_amount(sales, quantity, price))
    result['sls_quantity'] = to_integer(quantity)
    result['sls_price'] = to_integer(reconcile_price(sales, quantity, price))
    return result.reset_index(drop=True)
