# This is a simple program to show how to use IsoWrap to put the contents of
# a file object onto a new ISO.

# Import standard python modules.
import sys
from io import BytesIO

# Import isowrap itself.
import isowrap

# Check that there are enough command-line arguments.
if len(sys.argv) != 2:
    print('Usage: %s <outfile>' % (sys.argv[0]))
    sys.exit(1)

# Create a new IsoWrap object, accepting the default layout.
iso = isowrap.IsoWrap()

# The data to put on the ISO, and the ISO9660 name it will be given.  The name
# may only contain capital letters, digits, and underscores; IsoWrap will
# raise an IsoWrapInvalidInput exception otherwise.
foostr = b'foo\n'

# The output file must be opened exclusively, so an existing file is never
# overwritten, and positioned past the 16 sectors of the System Area.
with open(sys.argv[1], 'xb') as outfp:
    outfp.seek(16 * 2048)
    total = iso.wrap_fp(BytesIO(foostr), outfp, len(foostr), b'FOO')

print('Wrote %d sectors' % (total))
