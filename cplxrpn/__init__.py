''' CPLXRPN : stack based RPN calculator for real and complex numbers '''
