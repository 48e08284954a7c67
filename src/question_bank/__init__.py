"""Company question bank: search, filter, insights and exports."""
