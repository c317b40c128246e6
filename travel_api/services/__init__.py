"""
Travel API — Services Layer

    - TravelService: destinations, hotels and contact messages over an
      injected Datastore
"""
