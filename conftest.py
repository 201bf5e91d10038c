# Puts the repository root on sys.path so tests import sparsepoly without installing.
