# If a warning has already been raised somewhere else before a test
# attempts to capture and verify it, it may be on the "do not repeat"
# list and never show up again. By having the "always" filter installed
# before anything else, every test can rely on seeing all warnings.
import warnings
warnings.simplefilter("always")
