# UI Components
