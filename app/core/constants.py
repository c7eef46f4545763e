GEMINI_GENERATE_PATH = "/models/{model}:generateContent"

UNCATEGORIZED = "Uncategorized"

MSG_RECEIVED = "Message received successfully!"
MSG_FIELDS_REQUIRED = "Name, email, and message fields are required."
MSG_API_KEY_MISSING = "Server configuration error: Gemini API key missing."
MSG_INTERNAL_ERROR = "Internal server error"
MSG_RETRIES_EXHAUSTED = "Failed to get a successful response from Gemini API after all retries."
