"""
Travel API — Routes Package

Route Inventory:
    - travel.py:  GET  /api/destinations
                  GET  /api/hotels/{destination_id}
                  POST /api/contact
    - health.py:  GET  /health
                  GET  /api/test-db
"""
