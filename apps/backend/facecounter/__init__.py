"""facecounter: auth, session and interview-coach backend for the mock-interview app."""
