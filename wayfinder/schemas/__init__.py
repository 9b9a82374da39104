# Request and response schemas
