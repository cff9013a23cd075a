"""All magic values live here — no inline literals anywhere else."""

# Recognize Text REST API (v2.0)
RECOGNIZE_TEXT_PATH = "/vision/v2.0/recognizeText"
MODE_PARAM = "mode"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OPERATION_LOCATION_HEADER = "Operation-Location"
CONTENT_TYPE_HEADER = "Content-Type"
OCTET_STREAM = "application/octet-stream"
URL_BODY_FIELD = "url"
STATUS_FIELD = "status"

# Polled operation status values
STATUS_SUCCEEDED = "Succeeded"
STATUS_FAILED = "Failed"

# Poll cadence: one attempt, then one per second, ten attempts in total.
POLL_INTERVAL_SECONDS: float = 1.0
POLL_MAX_ATTEMPTS = 10

# Config defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT = "30"
DEFAULT_IMAGE_FILE_PATH = "Images/handwritten_text.jpg"
DEFAULT_REMOTE_IMAGE_URL = (
    "https://github.com/Azure-Samples/cognitive-services-sample-data-files/"
    "raw/master/ComputerVision/Images/printed_text.jpg"
)

# Log messages
MSG_STARTING = "Recognizing text from the images"
MSG_SUBMITTING = "POST recognizeText (mode=%s, source=%s)"
MSG_SUBMIT_ACCEPTED = "Submission accepted (%s) → %s"
MSG_SUBMIT_REJECTED = "Submission rejected with HTTP %s"
MSG_POLL_PENDING = "Poll %d/%d: status=%s"
MSG_POLL_SUCCEEDED = "Operation succeeded after %d poll(s)"
MSG_POLL_TIMEOUT = "Operation did not succeed after %d poll(s)"
MSG_TRANSPORT_FAILED = "HTTP request failed: %s"

# Error descriptions
ERR_INVALID_URL = "Invalid remote image url: %s"
ERR_INVALID_FILE = "Invalid file path: %s"
ERR_UNREADABLE_FILE = "Could not read image file %s: %s"
ERR_EMPTY_IMAGE = "Image data is empty"
ERR_MISSING_OPERATION_LOCATION = "Response is missing the Operation-Location header"
ERR_INVALID_OPERATION_LOCATION = "Operation-Location is not an absolute URI: %s"
ERR_POLL_NOT_JSON = "Operation status is not valid JSON: %s"
ERR_POLL_NOT_OBJECT = "Operation status is not a JSON object"

# Console output
LABEL_FILE_SAMPLE = "local image"
LABEL_URL_SAMPLE = "remote image"
OUT_HEADER = "\n[bold]Response ({label}):[/bold]"
OUT_REJECTED = "Response ({label}): HTTP {status_code}"
OUT_TIMEOUT = "Timeout error ({label}): no result after {attempts} poll(s)."
OUT_ERROR = "{kind} ({label}): {message}"
