GWL_STYLE = -16
GWL_EXSTYLE = -20
GW_OWNER = 4

WS_POPUP = 0x80000000
WS_DISABLED = 0x08000000

WS_EX_DLGMODALFRAME = 0x00000001
WS_EX_TOPMOST = 0x00000008
WS_EX_TOOLWINDOW = 0x00000080
WS_EX_NOACTIVATE = 0x08000000

DIALOG_CLASS_NAME = "#32770"
