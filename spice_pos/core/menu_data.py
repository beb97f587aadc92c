# Static restaurant data loaded once at start-up.

MENU = [
    {"id": 1, "name": "Samosa", "category": "starters", "price": 80, "icon": "🥟"},
    {"id": 2, "name": "Paneer Tikka", "category": "starters", "price": 180, "icon": "🧀"},
    {"id": 3, "name": "Chicken 65", "category": "starters", "price": 220, "icon": "🍗"},
    {"id": 4, "name": "Veg Pakora", "category": "starters", "price": 120, "icon": "🥬"},
    {"id": 5, "name": "Tomato Shorba", "category": "starters", "price": 110, "icon": "🍅"},
    {"id": 10, "name": "Butter Chicken", "category": "mains", "price": 340, "icon": "🍛"},
    {"id": 11, "name": "Hyderabadi Biryani", "category": "mains", "price": 350, "icon": "🍚"},
    {"id": 12, "name": "Paneer Butter Masala", "category": "mains", "price": 280, "icon": "🍲"},
    {"id": 13, "name": "Dal Makhani", "category": "mains", "price": 240, "icon": "🫘"},
    {"id": 14, "name": "Tandoori Chicken", "category": "mains", "price": 380, "icon": "🍗"},
    {"id": 15, "name": "Veg Biryani", "category": "mains", "price": 260, "icon": "🍚"},
    {"id": 20, "name": "Butter Naan", "category": "breads", "price": 50, "icon": "🫓"},
    {"id": 21, "name": "Garlic Naan", "category": "breads", "price": 60, "icon": "🧄"},
    {"id": 22, "name": "Tandoori Roti", "category": "breads", "price": 30, "icon": "🫓"},
    {"id": 23, "name": "Laccha Paratha", "category": "breads", "price": 55, "icon": "🥞"},
    {"id": 30, "name": "Gulab Jamun", "category": "desserts", "price": 80, "icon": "🍡"},
    {"id": 31, "name": "Kulfi", "category": "desserts", "price": 90, "icon": "🍨"},
    {"id": 32, "name": "Rasmalai", "category": "desserts", "price": 100, "icon": "🍮"},
    {"id": 40, "name": "Mango Lassi", "category": "drinks", "price": 90, "icon": "🥭"},
    {"id": 41, "name": "Masala Chai", "category": "drinks", "price": 40, "icon": "☕"},
    {"id": 42, "name": "Fresh Lime Soda", "category": "drinks", "price": 60, "icon": "🍋"},
    {"id": 43, "name": "Filter Coffee", "category": "drinks", "price": 50, "icon": "☕"},
]

TABLES = [
    {"id": 1, "name": "Table 1", "capacity": 2},
    {"id": 2, "name": "Table 2", "capacity": 4},
    {"id": 3, "name": "Table 3", "capacity": 4},
    {"id": 4, "name": "Table 4", "capacity": 6},
    {"id": 5, "name": "Table 5", "capacity": 2},
    {"id": 6, "name": "Table 6", "capacity": 8},
    {"id": 7, "name": "Patio 1", "capacity": 4},
    {"id": 8, "name": "Patio 2", "capacity": 4},
]
