"""Static mock data templates for the ERP cache service."""

# Warehouses
WAREHOUSES = ["Main Storage Facility", "Cold Storage Unit", "Hazardous Materials Storage"]

# Supplier templates
SUPPLIERS = [
    {
        "name": "Pharma Chemicals Inc.",
        "contactPerson": "John Smith",
        "email": "john@pharmachemicals.com",
        "phone": "+1 123-456-7890",
        "city": "Boston",
        "materials": ["Raw chemicals", "Solvents", "Reagents"],
        "status": "active"
    },
    {
        "name": "Medical Supplies Co.",
        "contactPerson": "Sarah Johnson",
        "email": "sarah@medicalsupplies.com",
        "phone": "+1 234-567-8901",
        "city": "Chicago",
        "materials": ["Packaging materials", "Vials", "Syringes"],
        "status": "active"
    },
    {
        "name": "Lab Equipment Ltd.",
        "contactPerson": "Michael Chen",
        "email": "mchen@labequipment.com",
        "phone": "+1 345-678-9012",
        "city": "San Francisco",
        "materials": ["Laboratory equipment", "Testing supplies"],
        "status": "on_hold"
    },
    {
        "name": "Global Pharma Solutions",
        "contactPerson": "Emma Williams",
        "email": "emma@globalpharma.com",
        "phone": "+1 456-789-0123",
        "city": "Newark",
        "materials": ["Active pharmaceutical ingredients", "Excipients"],
        "status": "inactive"
    }
]

# Product templates: (name, category, warehouse index, stock, reorder level, expiry, price, unit)
PRODUCTS = [
    ("Aspirin 500mg", "Pharmaceuticals", 0, 150, 50, "2025-08-15", 5.50, "tablets"),
    ("Paracetamol 250mg", "Pharmaceuticals", 1, 5, 30, "2025-03-20", 8.75, "tablets"),
    ("Amoxicillin 500mg", "Pharmaceuticals", 0, 0, 25, "2025-12-10", 15.25, "capsules"),
    ("Insulin Vials", "Pharmaceuticals", 1, 25, 15, "2025-06-01", 85.00, "vials"),
    ("Sulfuric Acid 98%", "Chemicals", 2, 12, 20, "2026-01-01", 125.75, "liters"),
    ("Sodium Hydroxide", "Chemicals", 2, 500, 100, "2025-12-31", 45.00, "kg"),
    ("Ethanol 95%", "Chemicals", 2, 150, 40, "2025-11-20", 28.90, "liters"),
    ("Calcium Carbonate", "Raw Materials", 0, 600, 150, None, 850.00, "kg"),
    ("Magnesium Sulfate", "Raw Materials", 0, 15, 40, "2025-01-30", 650.00, "kg"),
    ("Glass Vials 10ml", "Packaging Materials", 0, 2000, 500, None, 0.75, "pcs"),
    ("Plastic Bottles 100ml", "Packaging Materials", 1, 45, 200, None, 1.25, "pcs"),
    ("Latex Gloves", "Equipment & Supplies", 0, 0, 100, "2024-12-31", 12.50, "boxes"),
]
