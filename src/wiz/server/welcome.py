"""Built-in welcome page.

Answers ``GET /`` when the route table is empty (and is the single
route a fresh ``gen_server()`` starts with). The page is a compiled-in
kida template rendered once at import time.
"""

from kida import Environment

from wiz.context import Context

ICON_SVG = """<svg width="100%" height="100%" viewBox="0 0 174 96" version="1.1" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" xml:space="preserve" xmlns:serif="http://www.serif.com/" style="fill-rule:evenodd;clip-rule:evenodd;stroke-linejoin:round;stroke-miterlimit:2;"><path d="M58.748,93.822C57.798,94.488 57.085,94.82 56.609,94.82C55.563,94.82 54.85,94.393 54.47,93.537C51.618,87.833 49.241,80.132 47.34,70.435C47.245,70.055 47.102,69.865 46.912,69.865L46.057,70.435C43.49,74.999 40.519,79.229 37.144,83.127C33.769,87.025 31.036,89.782 28.944,91.398L25.807,93.822C24.856,94.678 24.096,95.106 23.525,95.106C22.48,95.106 21.767,94.63 21.386,93.68C19.295,89.687 16.871,81.939 14.114,70.435L12.83,64.589C11.024,56.223 9.194,49.52 7.34,44.482C5.486,39.443 4.084,36.496 3.133,35.64L1.707,34.357C0.852,34.072 0.424,33.596 0.424,32.931C0.424,31.6 2.397,30.174 6.342,28.653C10.287,27.132 13.353,26.371 15.54,26.371C17.726,26.371 19.176,27.251 19.889,29.009C20.602,30.768 21.719,35.688 23.24,43.769C27.233,65.064 30.133,75.712 31.939,75.712C32.509,75.712 33.151,75.213 33.864,74.214C34.577,73.216 35.433,72.004 36.431,70.578C37.429,69.152 38.784,66.68 40.495,63.163C42.206,59.645 43.062,56.555 43.062,53.893C43.062,53.418 42.729,51.683 42.064,48.688C41.398,45.694 40.424,42.794 39.14,39.99C37.857,37.185 36.835,35.593 36.074,35.213C34.363,34.262 33.508,33.454 33.508,32.788C33.508,31.647 35.457,30.293 39.354,28.724C43.252,27.155 46.77,26.371 49.907,26.371C51.333,26.371 52.331,27.227 52.902,28.938C54.328,33.406 56.039,41.44 58.035,53.038C60.602,67.869 62.979,75.284 65.165,75.284C65.926,75.284 67.067,74.214 68.588,72.075C70.109,69.936 71.606,66.823 73.08,62.735C74.553,58.647 75.29,55.153 75.29,52.254C75.29,49.354 75.171,47.12 74.934,45.551C74.696,43.983 73.864,42.153 72.438,40.061C71.012,37.97 69.396,36.757 67.59,36.425C65.783,36.092 64.88,35.498 64.88,34.642C64.88,33.311 66.853,31.6 70.798,29.508C74.744,27.417 78.808,26.371 82.991,26.371C86.984,26.371 88.98,30.364 88.98,38.35C88.98,48.332 86.033,58.599 80.139,69.152C74.244,79.705 67.114,87.928 58.748,93.822Z" style="fill:#ec8667;fill-rule:nonzero;"/><path d="M108.089,14.678L104.666,14.535C102.099,14.535 100.436,15.153 99.675,16.389C99.485,16.674 99.247,16.817 98.962,16.817C97.726,16.817 97.108,14.702 97.108,10.471C97.108,6.24 97.75,3.555 99.034,2.414C100.317,1.273 102.551,0.703 105.736,0.703C108.921,0.703 111.083,1.249 112.224,2.343C113.365,3.436 113.935,5.266 113.935,7.833C113.935,10.4 113.508,12.182 112.652,13.18C111.796,14.179 110.275,14.678 108.089,14.678ZM96.681,86.692L98.249,53.466C98.249,45.575 97.346,40.204 95.54,37.352C94.969,36.401 94.304,35.688 93.543,35.213C92.973,35.022 92.688,34.642 92.688,34.072C92.688,32.36 95.112,30.697 99.96,29.081C104.809,27.464 108.35,26.656 110.584,26.656C112.818,26.656 113.983,27.227 114.078,28.368C114.078,30.269 113.817,35.664 113.294,44.553C112.771,53.442 112.509,62.782 112.509,72.574C112.509,82.366 113.08,88.451 114.221,90.828C114.506,91.303 114.648,91.778 114.648,92.254C114.648,93.489 112.842,94.107 109.23,94.107C105.617,94.107 101.909,93.157 98.107,91.255C97.156,90.78 96.681,89.259 96.681,86.692Z" style="fill:#ec8667;fill-rule:nonzero;"/><path d="M155.148,28.225L170.691,27.797C171.927,27.797 172.545,28.32 172.545,29.366C172.545,31.267 169.55,36.876 163.561,46.193C157.572,55.51 152.367,63.638 147.946,70.578C143.525,77.518 141.315,81.701 141.315,83.127C141.315,84.078 142.646,84.553 145.308,84.553C147.97,84.553 150.299,84.149 152.296,83.341C154.292,82.533 155.766,81.463 156.716,80.132C158.332,77.851 159.14,75.759 159.14,73.858C159.14,71.956 158.95,70.103 158.57,68.296C158.57,67.156 159.616,66.49 161.707,66.3C166.651,66.3 169.931,67.678 171.547,70.435C172.783,72.622 173.401,74.856 173.401,77.138C173.401,82.271 171.309,86.122 167.126,88.688C162.943,91.255 158,92.539 152.296,92.539L136.039,92.111L121.636,92.396C119.925,92.396 119.069,91.802 119.069,90.614C119.069,89.425 120.614,86.312 123.704,81.273C126.793,76.235 129.907,71.481 133.044,67.013L137.75,60.311C145.736,47.762 149.99,40.988 150.513,39.99C151.036,38.991 151.297,38.112 151.297,37.352C151.297,36.021 149.919,35.355 147.162,35.355C144.405,35.355 141.909,35.735 139.675,36.496C137.441,37.257 135.611,38.183 134.185,39.277C132.759,40.37 131.523,41.487 130.477,42.628C128.576,44.719 127.625,46.05 127.625,46.621C127.34,47.571 126.817,48.047 126.057,48.047L125.914,48.047C124.583,48.047 123.918,47.239 123.918,45.623C123.918,41.915 124.773,37.542 126.484,32.503L127.483,29.936C127.863,28.605 128.861,27.94 130.477,27.94L155.148,28.225Z" style="fill:#ec8667;fill-rule:nonzero;"/></svg>"""

WELCOME_CSS = """
  <style>
    html, body {
      margin:0;padding:0;font-family:'pt mono', monospace;
      background-color:#FBFAEF;height:100%;overflow:hidden;
    }
    div.content {
      height:100%;margin:0;padding:10px;display:flex;align-items:center;
      justify-content:center;font-weight:500;box-sizing:border-box;box-shadow:inset 0 0 0 5px #ec8667;
    }
    div.content > span {
      display:flex; align-items:flex-end;
    }
    span.text {
      display:inline-block;margin-left:15px;font-size:15px;color:rgb(60,60,60);
    }
    svg {height:22px;width:auto;}
  </style>
"""

_WELCOME_TEMPLATE = """<!DOCTYPE html><html>
  <head>
    <title>{{ title }}</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    {{ css }}
  </head>
  <body>
    <div class="content">
      <span>{{ icon }}<span class="text">is running.</span></span>
    </div>
  </body>
</html>"""

WELCOME_HTML: str = (
    Environment(autoescape=False)
    .from_string(_WELCOME_TEMPLATE)
    .render({"title": "Wiz", "css": WELCOME_CSS, "icon": ICON_SVG})
)


async def welcome(ctx: Context) -> None:
    """Send the welcome page."""
    await ctx.send_html(WELCOME_HTML)
