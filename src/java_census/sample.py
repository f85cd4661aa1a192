"""Built-in Java source scanned when no root path is configured."""

# Scanned as one file whose identifier is empty
SAMPLE_FILE_ID = ""

SAMPLE_SOURCE = """
class MyClass {
    private int number = 42;

    public void aMethod() {
        String message = "Hello, Java!";
        boolean isValid = true;
    }
}
"""
