PROJECT_NAME = "clawdesk"
API_V1_STR = "/api/v1"
