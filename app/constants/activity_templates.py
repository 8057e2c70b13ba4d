from app.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- INVENTORY ----------------
    ActivityCode.ADJUST_STOCK:
        "{actor} performed stock {adjustment_type} of {quantity} units "
        "for product {product_name} at {location_name} "
        "({previous_stock} → {new_stock}, reason: {reason})",

    ActivityCode.ADJUST_STOCK_MULTI_LOCATION:
        "{actor} adjusted stock of product {product_name} at {location_count} location(s) "
        "(total {total_previous_stock} → {total_new_stock}, reason: {reason})",

    ActivityCode.BULK_ADD_STOCK:
        "{actor} added {stock_to_add} units to {products_updated} products "
        "across {locations_updated} locations ({total_updates} stock rows)",

    ActivityCode.TRANSFER_STOCK:
        "{actor} transferred {quantity} units of product {product_name} "
        "from {from_location_name} to {to_location_name} (ref: {transfer_code})",

    # ---------------- CATALOG ----------------
    ActivityCode.UPDATE_STOCK_POLICY:
        "{actor} changed negative stock policy of product {product_name}: "
        "{old_policy} → {new_policy}",
}
